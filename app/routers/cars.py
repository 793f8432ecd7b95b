from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.cars import create_car_action, delete_car_action, update_car_action
from app.config import settings
from app.database import get_db
from app.queries import cars as car_queries
from app.queries import services as service_queries
from app.schemas.car import CarPage, CarResponse
from app.schemas.service import CarWithServices, ServiceResponse
from app.utils.cache import cached_view
from app.utils.exceptions import AppException
from app.utils.forms import read_form
from app.utils.response import redirect_response, success_response

router = APIRouter(prefix="/cars", tags=["cars"])


@router.get("")
async def get_cars(
    request: Request,
    q: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.page_size, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    async def build():
        if q:
            result = await car_queries.search_cars_paginated(db, q, page, page_size)
        else:
            result = await car_queries.list_cars_paginated(db, page, page_size)
        return CarPage.model_validate(result).model_dump(mode="json")

    return success_response(data=await cached_view(request, build))


@router.post("", status_code=201)
async def create_car(request: Request, db: AsyncSession = Depends(get_db)):
    result = await create_car_action(db, await read_form(request))
    return redirect_response(result.redirect, car=result.data.model_dump(mode="json"))


@router.get("/{car_id}")
async def get_car(car_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    async def build():
        found = await car_queries.get_car_with_services(db, car_id)
        if found is None:
            raise AppException("Car not found", status_code=404)
        car, services = found
        return CarWithServices(
            **CarResponse.model_validate(car).model_dump(),
            services=[ServiceResponse.model_validate(s) for s in services],
        ).model_dump(mode="json")

    return success_response(data=await cached_view(request, build))


@router.get("/{car_id}/services")
async def get_car_services(car_id: int, db: AsyncSession = Depends(get_db)):
    if await car_queries.get_car(db, car_id) is None:
        raise AppException("Car not found", status_code=404)
    services = await service_queries.list_services_by_car(db, car_id)
    return success_response(data=[ServiceResponse.model_validate(s).model_dump(mode="json") for s in services])


@router.put("/{car_id}")
async def update_car(car_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    result = await update_car_action(db, car_id, await read_form(request))
    return redirect_response(result.redirect, car=result.data.model_dump(mode="json"))


@router.delete("/{car_id}")
async def delete_car(car_id: int, db: AsyncSession = Depends(get_db)):
    result = await delete_car_action(db, car_id)
    return redirect_response(result.redirect, message="Car deleted")
