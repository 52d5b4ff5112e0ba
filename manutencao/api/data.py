from __future__ import annotations
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from manutencao.api.deps import (
    SessionContext,
    get_app_data,
    get_lookup,
    get_record_filters,
    get_session_context,
)
from manutencao.core.exceptions import BusinessLogicError, ValidationError, business_exception_to_http
from manutencao.schemas.maintenance import (
    DataSnapshot,
    MaintenanceRecordPayload,
    MutationResponse,
    ReferenceItemPayload,
    ReportResponse,
)
from manutencao.services.app_data import AppDataStore
from manutencao.services.crud import REFERENCE_KEYS, TableKey, resolve_table_key
from manutencao.services.export import CSV_MEDIA_TYPE, export_filename, history_csv
from manutencao.services.reports import RecordFilters, ReferenceLookup, filter_records

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["data"])


def _reference_key(key: str) -> TableKey:
    table = resolve_table_key(key)
    if table not in REFERENCE_KEYS:
        raise ValidationError(f"Table {table.value} is not a reference table", {"table": table.value})
    return table


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error while trying to {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"An unexpected error occurred while trying to {action}",
    )


@router.get("/data", response_model=DataSnapshot)
async def get_data(
    store: AppDataStore = Depends(get_app_data),
    _: SessionContext = Depends(get_session_context),
) -> Dict[str, Any]:
    """Every cached table plus the loading flag."""
    return store.snapshot()


@router.post("/data/reload", response_model=DataSnapshot)
async def reload_data(
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> Dict[str, Any]:
    try:
        await store.load_all()
    except Exception as e:
        raise _unexpected("reload data", e)
    logger.info(f"User {ctx.user.id} reloaded all tables")
    return store.snapshot()


@router.get("/reference/{key}")
async def list_reference(
    key: str,
    store: AppDataStore = Depends(get_app_data),
    _: SessionContext = Depends(get_session_context),
) -> List[Any]:
    try:
        return store.reference_rows(_reference_key(key))
    except BusinessLogicError as e:
        raise business_exception_to_http(e)


@router.post("/reference/{key}", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_reference(
    key: str,
    payload: ReferenceItemPayload,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    """Create a row in one of the reference tables; the id is generated when absent."""
    try:
        row = await store.create_reference(_reference_key(key), payload.to_sheet_row())
        logger.info(f"User {ctx.user.id} created {key} row {row['id']}")
        return MutationResponse(id=row["id"])
    except BusinessLogicError as e:
        logger.warning(f"Business logic error creating {key} row: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected(f"create {key} row", e)


@router.put("/reference/{key}/{item_id}", response_model=MutationResponse)
async def update_reference(
    key: str,
    item_id: str,
    payload: ReferenceItemPayload,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    try:
        item = payload.to_sheet_row()
        item["id"] = item_id
        row = await store.update_reference(_reference_key(key), item)
        logger.info(f"User {ctx.user.id} updated {key} row {item_id}")
        return MutationResponse(id=row["id"])
    except BusinessLogicError as e:
        logger.warning(f"Business logic error updating {key} row: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected(f"update {key} row", e)


@router.delete("/reference/{key}/{item_id}", response_model=MutationResponse)
async def delete_reference(
    key: str,
    item_id: str,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    try:
        await store.delete_reference(_reference_key(key), item_id)
        logger.info(f"User {ctx.user.id} deleted {key} row {item_id}")
        return MutationResponse(id=item_id)
    except BusinessLogicError as e:
        logger.warning(f"Business logic error deleting {key} row: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected(f"delete {key} row", e)


@router.get("/history", response_model=ReportResponse)
async def list_history(
    filters: RecordFilters = Depends(get_record_filters),
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> ReportResponse:
    """Cached history, newest first, narrowed by the query filters."""
    records = filter_records(store.history, filters, lookup)
    return ReportResponse(total=len(records), records=records)


@router.get("/history/export.csv")
async def export_history(
    store: AppDataStore = Depends(get_app_data),
    lookup: ReferenceLookup = Depends(get_lookup),
    _: SessionContext = Depends(get_session_context),
) -> Response:
    """Every history record in the condensed CSV layout."""
    if not store.history:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    filename = export_filename("TODOS_LANCAMENTOS")
    return Response(
        content=history_csv(store.history, lookup),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/history", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_history(
    payload: MaintenanceRecordPayload,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    try:
        row = await store.save_record(payload)
        logger.info(f"User {ctx.user.id} registered maintenance {row['id']}")
        return MutationResponse(id=row["id"])
    except BusinessLogicError as e:
        logger.warning(f"Business logic error saving maintenance record: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected("save maintenance record", e)


@router.put("/history/{record_id}", response_model=MutationResponse)
async def update_history(
    record_id: str,
    payload: MaintenanceRecordPayload,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    try:
        row = await store.update_record(payload.model_copy(update={"id": record_id}))
        logger.info(f"User {ctx.user.id} updated maintenance {record_id}")
        return MutationResponse(id=row["id"])
    except BusinessLogicError as e:
        logger.warning(f"Business logic error updating maintenance record: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected("update maintenance record", e)


@router.delete("/history/{record_id}", response_model=MutationResponse)
async def delete_history(
    record_id: str,
    store: AppDataStore = Depends(get_app_data),
    ctx: SessionContext = Depends(get_session_context),
) -> MutationResponse:
    try:
        await store.delete_record(record_id)
        logger.info(f"User {ctx.user.id} deleted maintenance {record_id}")
        return MutationResponse(id=record_id)
    except BusinessLogicError as e:
        logger.warning(f"Business logic error deleting maintenance record: {e}")
        raise business_exception_to_http(e)
    except Exception as e:
        raise _unexpected("delete maintenance record", e)
