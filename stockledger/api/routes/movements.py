"""Stock movement ledger endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from stockledger.api.dependencies import (
    get_export_movements_use_case,
    get_import_movements_use_case,
    get_issue_stock_use_case,
    get_movement_filter,
    get_movement_store,
    get_receive_stock_use_case,
)
from stockledger.application.dto.requests import RecordEntryRequest, RecordExitRequest
from stockledger.application.dto.responses import (
    DeleteResponse,
    ErrorResponse,
    ImportResultResponse,
    MovementListResponse,
    MovementResponse,
    StockWriteResponse,
    UnreconciledResponse,
)
from stockledger.application.use_cases import (
    ExportMovementsUseCase,
    ImportMovementsUseCase,
    IssueStockUseCase,
    ReceiveStockUseCase,
)
from stockledger.core.entities.movement import MovementFilter
from stockledger.core.interfaces import IMovementStore
from stockledger.core.services import filter_movements

router = APIRouter(prefix="/api/movements", tags=["movements"])

_WRITE_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "/entries",
    response_model=StockWriteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
)
async def record_entry(
    request: RecordEntryRequest,
    use_case: ReceiveStockUseCase = Depends(get_receive_stock_use_case),
) -> StockWriteResponse:
    """Record stock arriving and raise the catalog quantity."""
    result = await use_case.execute(request.to_draft())
    return use_case.to_response(result)


@router.post(
    "/exits",
    response_model=StockWriteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_WRITE_ERRORS, 409: {"model": ErrorResponse}},
)
async def record_exit(
    request: RecordExitRequest,
    use_case: IssueStockUseCase = Depends(get_issue_stock_use_case),
) -> StockWriteResponse:
    """Record stock leaving, after checking the quantity on hand."""
    result = await use_case.execute(request.to_draft())
    return use_case.to_response(result)


@router.get("", response_model=MovementListResponse)
async def list_movements(
    criteria: MovementFilter = Depends(get_movement_filter),
    store: IMovementStore = Depends(get_movement_store),
) -> MovementListResponse:
    """Filtered movements, newest first."""
    movements = filter_movements(await store.all(), criteria)
    return MovementListResponse(
        items=[MovementResponse.from_entity(m) for m in movements],
        total=len(movements),
    )


@router.get("/export")
async def export_movements(
    use_case: ExportMovementsUseCase = Depends(get_export_movements_use_case),
) -> list[dict[str, Any]]:
    """The whole log in the camelCase ledger layout, oldest first."""
    return await use_case.execute()


@router.post(
    "/import",
    response_model=ImportResultResponse,
    responses={400: {"model": ErrorResponse}},
)
async def import_movements(
    records: list[dict[str, Any]] = Body(..., description="Exported ledger records"),
    use_case: ImportMovementsUseCase = Depends(get_import_movements_use_case),
) -> ImportResultResponse:
    """Append exported records; ids already present are skipped."""
    result = await use_case.execute(records)
    return use_case.to_response(result)


@router.get("/unreconciled", response_model=list[UnreconciledResponse])
async def list_unreconciled(
    store: IMovementStore = Depends(get_movement_store),
) -> list[UnreconciledResponse]:
    """Movements whose catalog update failed under the flag policy."""
    return [UnreconciledResponse.from_entity(item) for item in await store.list_unreconciled()]


@router.delete("/unreconciled/{movement_id}", response_model=DeleteResponse)
async def resolve_unreconciled(
    movement_id: str,
    store: IMovementStore = Depends(get_movement_store),
) -> DeleteResponse:
    """Clear a review flag once the catalog has been fixed by hand."""
    resolved = await store.resolve_unreconciled(movement_id)
    return DeleteResponse(id=movement_id, deleted=resolved)


@router.delete("/{movement_id}", response_model=DeleteResponse)
async def delete_movement(
    movement_id: str,
    store: IMovementStore = Depends(get_movement_store),
) -> DeleteResponse:
    """Delete one movement. Unknown ids are not an error.

    The catalog quantity is left unchanged.
    """
    deleted = await store.delete_by_id(movement_id)
    return DeleteResponse(id=movement_id, deleted=deleted)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_movements(
    store: IMovementStore = Depends(get_movement_store),
) -> Response:
    """Erase the whole ledger."""
    await store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
