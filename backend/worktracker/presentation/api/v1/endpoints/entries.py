"""Work entry endpoints — list/search, CRUD, totals and CSV export."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from worktracker.application.schemas import (
    TotalsResponse,
    WorkEntryCreate,
    WorkEntryResponse,
    WorkEntryUpdate,
)
from worktracker.application.services import WorkEntryService
from worktracker.domain.exceptions import EntityNotFoundError, PersistenceWriteError
from worktracker.infrastructure.dependencies import get_work_entry_service

router = APIRouter(prefix="/entries", tags=["Work Entries"])

CSV_FILENAME = "work_entries.csv"


def _save_failed(exc: PersistenceWriteError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("", response_model=list[WorkEntryResponse])
async def list_entries(
    q: str = Query("", description="Search client, location, description and materials"),
    service: WorkEntryService = Depends(get_work_entry_service),
) -> list[WorkEntryResponse]:
    """Retrieve all entries, or those matching a case-insensitive search."""
    return [
        WorkEntryResponse.model_validate(e, from_attributes=True)
        for e in service.list_entries(q)
    ]


@router.get("/totals", response_model=TotalsResponse)
async def get_totals(
    service: WorkEntryService = Depends(get_work_entry_service),
) -> TotalsResponse:
    """Total hours and amount across every entry, ignoring any search."""
    hours, amount, count = service.totals()
    return TotalsResponse(total_hours=hours, total_amount=amount, entry_count=count)


@router.get("/export.csv")
async def export_csv(
    q: str = Query("", description="Export only entries matching this search"),
    service: WorkEntryService = Depends(get_work_entry_service),
) -> Response:
    """Export entries as CSV text in display order."""
    return Response(
        content=service.export_csv(q),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )


@router.get("/{entry_id}", response_model=WorkEntryResponse)
async def get_entry(
    entry_id: str,
    service: WorkEntryService = Depends(get_work_entry_service),
) -> WorkEntryResponse:
    """Retrieve a single entry by ID."""
    try:
        entry = service.get_entry(entry_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return WorkEntryResponse.model_validate(entry, from_attributes=True)


@router.post("", response_model=WorkEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    data: WorkEntryCreate,
    service: WorkEntryService = Depends(get_work_entry_service),
) -> WorkEntryResponse:
    """Record a new entry; it appears first in the list."""
    try:
        entry = await service.create_entry(data)
    except PersistenceWriteError as e:
        raise _save_failed(e)
    return WorkEntryResponse.model_validate(entry, from_attributes=True)


@router.put("/{entry_id}", response_model=WorkEntryResponse)
async def update_entry(
    entry_id: str,
    data: WorkEntryUpdate,
    service: WorkEntryService = Depends(get_work_entry_service),
) -> WorkEntryResponse:
    """Replace every field of an existing entry except its ID."""
    try:
        entry = await service.update_entry(entry_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceWriteError as e:
        raise _save_failed(e)
    return WorkEntryResponse.model_validate(entry, from_attributes=True)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    service: WorkEntryService = Depends(get_work_entry_service),
) -> None:
    """Delete an entry by ID. Unknown IDs are not an error."""
    try:
        await service.delete_entry(entry_id)
    except PersistenceWriteError as e:
        raise _save_failed(e)
