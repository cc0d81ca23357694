"""REST routes for field definitions and their per-resource values."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from extrafields.database import get_db
from extrafields.exceptions import FieldNotFoundError, NotFoundError
from extrafields.host import Host, get_host
from extrafields.schemas import (
    DiagnosticsResponse,
    FieldCreate,
    FieldResponse,
    FieldUpdate,
    ValueResponse,
    ValueUpdate,
)
from extrafields.services import field_service, value_service
from extrafields.services.diagnostics_service import Diagnostics

router = APIRouter()


@router.get("/fields", response_model=list[FieldResponse], tags=["Fields"])
async def list_fields(
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
):
    return await field_service.get_fields(db, search=search, skip=skip, limit=limit)


@router.post("/fields", response_model=FieldResponse, status_code=status.HTTP_201_CREATED, tags=["Fields"])
async def create_field(data: FieldCreate, db: AsyncSession = Depends(get_db)):
    return await field_service.create_field(db, data.name, description=data.description, rank=data.rank)


@router.get("/fields/{field_id}", response_model=FieldResponse, tags=["Fields"])
async def get_field(field_id: int, db: AsyncSession = Depends(get_db)):
    field = await field_service.get_field(db, field_id)
    if not field:
        raise FieldNotFoundError(field_id)
    return field


@router.put("/fields/{field_id}", response_model=FieldResponse, tags=["Fields"])
async def update_field(field_id: int, data: FieldUpdate, db: AsyncSession = Depends(get_db)):
    return await field_service.update_field(
        db,
        field_id,
        data.name,
        description=data.description,
        rank=data.rank,
    )


@router.delete("/fields/{field_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Fields"])
async def delete_field(field_id: int, db: AsyncSession = Depends(get_db)):
    await field_service.delete_field(db, field_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/fields/{field_id}/values/{resource_id}", response_model=ValueResponse, tags=["Values"])
async def get_value(field_id: int, resource_id: int, db: AsyncSession = Depends(get_db)):
    value = await value_service.get_value(db, field_id, resource_id)
    return ValueResponse(field_id=field_id, resource_id=resource_id, value=value)


@router.put("/fields/{field_id}/values/{resource_id}", response_model=ValueResponse, tags=["Values"])
async def set_value(field_id: int, resource_id: int, data: ValueUpdate, db: AsyncSession = Depends(get_db)):
    await value_service.set_value(db, field_id, resource_id, data.value)
    return ValueResponse(field_id=field_id, resource_id=resource_id, value=data.value)


@router.delete("/fields/{field_id}/values/{resource_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Values"])
async def delete_value(field_id: int, resource_id: int, db: AsyncSession = Depends(get_db)):
    if not await value_service.delete_value(db, field_id, resource_id):
        raise NotFoundError("Value", f"{field_id}/{resource_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/resources/{resource_id}/values", response_model=dict[str, str], tags=["Values"])
async def get_resource_values(resource_id: int, db: AsyncSession = Depends(get_db)):
    return await value_service.get_values_for_resource(db, resource_id)


@router.get("/diagnostics", response_model=DiagnosticsResponse, tags=["Diagnostics"])
async def run_diagnostics(host: Host = Depends(get_host)):
    report = await Diagnostics(host).run()
    return DiagnosticsResponse(**report.to_dict())
