import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from manutencao.api.deps import SessionContext, get_app_data, get_lookup, get_session_context
from manutencao.services.app_data import AppDataStore
from manutencao.services.export import print_sheet_context
from manutencao.services.reports import ReferenceLookup

logger = logging.getLogger(__name__)
router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


@router.get("/api/history/{record_id}/print", response_class=HTMLResponse)
async def print_service_order(
    request: Request,
    record_id: str,
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> HTMLResponse:
    """Render the printable sheet of one maintenance record.

    The page opens the browser print dialog on load.
    """

    record = store.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    return templates.TemplateResponse(
        request,
        "ordem_servico_print.html",
        print_sheet_context(record, lookup),
    )
