from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.common import ActionResult, persistence_errors, validate_form
from app.queries import mechanics as mechanic_queries
from app.schemas.mechanic import MechanicCreate, MechanicResponse, MechanicUpdate
from app.utils.cache import revalidate_path
from app.utils.exceptions import AppException


async def create_mechanic_action(db: AsyncSession, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(MechanicCreate, form)

    async with persistence_errors("Failed to create mechanic. Please try again."):
        mechanic = await mechanic_queries.create_mechanic(db, data)

    revalidate_path("/mechanics", "/dashboard")
    return ActionResult(redirect="/mechanics", data=MechanicResponse.model_validate(mechanic))


async def update_mechanic_action(db: AsyncSession, mechanic_id: int, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(MechanicUpdate, form)

    async with persistence_errors("Failed to update mechanic. Please try again."):
        mechanic = await mechanic_queries.update_mechanic(db, mechanic_id, data)
    if mechanic is None:
        raise AppException("Mechanic not found", status_code=404)

    revalidate_path("/mechanics", "/services", "/dashboard")
    return ActionResult(redirect=f"/mechanics/{mechanic_id}", data=MechanicResponse.model_validate(mechanic))


async def delete_mechanic_action(db: AsyncSession, mechanic_id: int) -> ActionResult:
    async with persistence_errors("Failed to delete mechanic. Please try again."):
        deleted = await mechanic_queries.delete_mechanic(db, mechanic_id)
    if not deleted:
        raise AppException("Mechanic not found", status_code=404)

    revalidate_path("/mechanics", "/services", "/cars", "/dashboard")
    return ActionResult(redirect="/mechanics")
