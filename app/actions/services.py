from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.common import ActionResult, persistence_errors, validate_form
from app.queries import services as service_queries
from app.schemas.service import ServiceCreate, ServiceUpdate
from app.utils.cache import revalidate_path
from app.utils.exceptions import AppException

# A service shows up on car and mechanic detail pages as well as its own
_AFFECTED_VIEWS = ("/services", "/cars", "/mechanics", "/dashboard")


async def create_service_action(db: AsyncSession, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(ServiceCreate, form)

    async with persistence_errors("Failed to create service. Please try again."):
        service = await service_queries.create_service(db, data)

    revalidate_path(*_AFFECTED_VIEWS)
    return ActionResult(redirect="/services", data=service)


async def update_service_action(db: AsyncSession, service_id: int, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(ServiceUpdate, form)

    async with persistence_errors("Failed to update service. Please try again."):
        service = await service_queries.update_service(db, service_id, data)
    if service is None:
        raise AppException("Service not found", status_code=404)

    revalidate_path(*_AFFECTED_VIEWS)
    return ActionResult(redirect=f"/services/{service_id}", data=service)


async def delete_service_action(db: AsyncSession, service_id: int) -> ActionResult:
    async with persistence_errors("Failed to delete service. Please try again."):
        deleted = await service_queries.delete_service(db, service_id)
    if not deleted:
        raise AppException("Service not found", status_code=404)

    revalidate_path(*_AFFECTED_VIEWS)
    return ActionResult(redirect="/services")
