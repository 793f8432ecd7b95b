from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.common import ActionResult, persistence_errors, validate_form
from app.queries import cars as car_queries
from app.schemas.car import CarCreate, CarResponse, CarUpdate
from app.utils.cache import revalidate_path
from app.utils.exceptions import AppException


async def create_car_action(db: AsyncSession, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(CarCreate, form)

    async with persistence_errors("Failed to create car. Please try again."):
        car = await car_queries.create_car(db, data)

    revalidate_path("/cars", "/dashboard")
    return ActionResult(redirect="/cars", data=CarResponse.model_validate(car))


async def update_car_action(db: AsyncSession, car_id: int, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(CarUpdate, form)

    async with persistence_errors("Failed to update car. Please try again."):
        car = await car_queries.update_car(db, car_id, data)
    if car is None:
        raise AppException("Car not found", status_code=404)

    revalidate_path("/cars", "/services", "/mechanics", "/dashboard")
    return ActionResult(redirect=f"/cars/{car_id}", data=CarResponse.model_validate(car))


async def delete_car_action(db: AsyncSession, car_id: int) -> ActionResult:
    async with persistence_errors("Failed to delete car. Please try again."):
        deleted = await car_queries.delete_car(db, car_id)
    if not deleted:
        raise AppException("Car not found", status_code=404)

    # services of the car were removed with it
    revalidate_path("/cars", "/services", "/mechanics", "/dashboard")
    return ActionResult(redirect="/cars")
