import logging

from fastapi import APIRouter, Depends

from manutencao.api.deps import SessionContext, get_ai_gateway, get_app_data, get_lookup, get_session_context
from manutencao.core.exceptions import BusinessLogicError, NotFoundError, business_exception_to_http
from manutencao.integrations.ai_gateway import AIGatewayService
from manutencao.schemas.maintenance import (
    AITextResponse,
    DefectAnalysisRequest,
    DiagnosisRequest,
    Equipment,
    HistorySummaryRequest,
)
from manutencao.services.app_data import AppDataStore
from manutencao.services.reports import RecordFilters, ReferenceLookup, filter_records

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ai", tags=["ai"])


def _require_equipment(lookup: ReferenceLookup, equipment_id: str) -> Equipment:
    equipment = lookup.equipment(equipment_id)
    if equipment is None:
        raise NotFoundError(f"Equipment {equipment_id} not found", {"equipamento_id": equipment_id})
    return equipment


@router.post("/analyze-defect", response_model=AITextResponse)
async def analyze_defect(
    payload: DefectAnalysisRequest,
    lookup: ReferenceLookup = Depends(get_lookup),
    ai: AIGatewayService = Depends(get_ai_gateway),
    _: SessionContext = Depends(get_session_context),
) -> AITextResponse:
    """Possible root causes and first steps for a reported defect."""
    try:
        equipment = _require_equipment(lookup, payload.equipamento_id)
    except BusinessLogicError as e:
        raise business_exception_to_http(e)
    return AITextResponse(text=await ai.analyze_defect(payload.defeito, equipment))


@router.post("/improve-diagnosis", response_model=AITextResponse)
async def improve_diagnosis(
    payload: DiagnosisRequest,
    lookup: ReferenceLookup = Depends(get_lookup),
    ai: AIGatewayService = Depends(get_ai_gateway),
    _: SessionContext = Depends(get_session_context),
) -> AITextResponse:
    try:
        equipment = _require_equipment(lookup, payload.equipamento_id)
    except BusinessLogicError as e:
        raise business_exception_to_http(e)
    return AITextResponse(text=await ai.improve_diagnosis(payload.diagnostico, payload.defeito, equipment))


@router.post("/history-summary", response_model=AITextResponse)
async def history_summary(
    payload: HistorySummaryRequest,
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    ai: AIGatewayService = Depends(get_ai_gateway),
    ctx: SessionContext = Depends(get_session_context),
) -> AITextResponse:
    """Pattern analysis over the equipment's (optionally filtered) history."""
    try:
        equipment = _require_equipment(lookup, payload.equipamento_id)
    except BusinessLogicError as e:
        raise business_exception_to_http(e)

    filters = RecordFilters(
        equipamento_id=payload.equipamento_id,
        mecanico_id=payload.mecanico_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        search=payload.search,
    )
    records = filter_records(store.history, filters, lookup)
    logger.info(f"User {ctx.user.id} requested history summary over {len(records)} records")
    return AITextResponse(text=await ai.generate_history_summary(records, equipment))
