from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from manutencao.api.deps import (
    SessionContext,
    get_app_data,
    get_lookup,
    get_record_filters,
    get_session_context,
)
from manutencao.schemas.maintenance import (
    DashboardResponse,
    DiagnosticHit,
    DiagnosticsResponse,
    ReportResponse,
)
from manutencao.services.app_data import AppDataStore
from manutencao.services.export import CSV_MEDIA_TYPE, export_filename, format_currency, report_csv
from manutencao.services.reports import (
    RecordFilters,
    ReferenceLookup,
    dashboard_stats,
    filter_records,
    generate_report,
    search_diagnostics,
    unique_causes,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    filters: RecordFilters = Depends(get_record_filters),
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> DashboardResponse:
    """Totals, status chart and latest interventions for the filtered history."""
    stats = dashboard_stats(filter_records(store.history, filters, lookup))
    return DashboardResponse(total_cost_display=format_currency(stats["total_cost"]), **stats)


@router.get("/reports", response_model=ReportResponse)
async def report(
    filters: RecordFilters = Depends(get_record_filters),
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> ReportResponse:
    records = generate_report(store.history, filters, lookup)
    return ReportResponse(total=len(records), records=records)


@router.get("/reports/export.csv")
async def export_report(
    filters: RecordFilters = Depends(get_record_filters),
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    ctx: SessionContext = Depends(get_session_context),
) -> Response:
    """Filtered report in the full CSV layout; 204 when nothing matches."""
    records = generate_report(store.history, filters, lookup)
    if not records:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    filename = export_filename("RELATORIO_MANUTENCAO")
    logger.info(f"User {ctx.user.id} exported {len(records)} records")
    return Response(
        content=report_csv(records, lookup),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/diagnostics/search", response_model=DiagnosticsResponse)
async def diagnostics_search(
    term: Optional[str] = None,
    equipamento_id: Optional[str] = None,
    setor_id: Optional[str] = None,
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> DiagnosticsResponse:
    """Past interventions matching a symptom, an equipment or a sector."""
    found = search_diagnostics(store.history, term=term, equipamento_id=equipamento_id, setor_id=setor_id)
    hits = [
        DiagnosticHit(
            record=r,
            equipment_label=lookup.equipment_label(r.equipamento_id),
            sector_name=lookup.sector_name(r.setor_id, default="-"),
        )
        for r in found
    ]
    return DiagnosticsResponse(total=len(hits), results=hits)


@router.get("/causes", response_model=List[str])
async def causes(
    store: AppDataStore = Depends(get_app_data),
    _: SessionContext = Depends(get_session_context),
) -> List[str]:
    return unique_causes(store.history)
