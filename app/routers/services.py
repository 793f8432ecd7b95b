from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.services import create_service_action, delete_service_action, update_service_action
from app.database import get_db
from app.models.service import ServiceStatus
from app.queries import services as service_queries
from app.utils.cache import cached_view
from app.utils.exceptions import AppException
from app.utils.forms import read_form
from app.utils.response import redirect_response, success_response

router = APIRouter(prefix="/services", tags=["services"])


@router.get("")
async def get_services(
    request: Request,
    status: ServiceStatus | None = None,
    q: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    async def build():
        if q:
            services = await service_queries.search_services(db, q)
            if status:
                services = [s for s in services if s.status == status.value]
        else:
            services = await service_queries.list_services(db, status)
        details = await service_queries.attach_details(db, services)
        return [s.model_dump(mode="json") for s in details]

    return success_response(data=await cached_view(request, build))


@router.get("/recent")
async def get_recent_services(limit: int = Query(5, ge=1, le=50), db: AsyncSession = Depends(get_db)):
    services = await service_queries.list_recent_services(db, limit)
    return success_response(data=[s.model_dump(mode="json") for s in services])


@router.get("/status-counts")
async def get_status_counts(db: AsyncSession = Depends(get_db)):
    counts = await service_queries.count_services_by_status(db)
    return success_response(data=[c.model_dump() for c in counts])


@router.post("", status_code=201)
async def create_service(request: Request, db: AsyncSession = Depends(get_db)):
    result = await create_service_action(db, await read_form(request))
    return redirect_response(result.redirect, service=result.data.model_dump(mode="json"))


@router.get("/{service_id}")
async def get_service(service_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    async def build():
        service = await service_queries.get_service_with_details(db, service_id)
        if service is None:
            raise AppException("Service not found", status_code=404)
        return service.model_dump(mode="json")

    return success_response(data=await cached_view(request, build))


@router.put("/{service_id}")
async def update_service(service_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    result = await update_service_action(db, service_id, await read_form(request))
    return redirect_response(result.redirect, service=result.data.model_dump(mode="json"))


@router.delete("/{service_id}")
async def delete_service(service_id: int, db: AsyncSession = Depends(get_db)):
    result = await delete_service_action(db, service_id)
    return redirect_response(result.redirect, message="Service deleted")
