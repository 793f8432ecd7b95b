from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.car import Car
from app.models.service import Service
from app.queries.pagination import Page, ilike_any, paginate
from app.schemas.car import CarCreate, CarUpdate

SEARCH_COLUMNS = (Car.brand, Car.model, Car.owner)
RECENT_SERVICES_PER_CAR = 10


def _newest_first(stmt):
    return stmt.order_by(Car.created_at.desc(), Car.id.desc())


def _search(term: str):
    return _newest_first(select(Car).where(or_(*ilike_any(SEARCH_COLUMNS, term))))


async def list_cars(db: AsyncSession) -> list[Car]:
    result = await db.execute(_newest_first(select(Car)))
    return list(result.scalars().all())


async def count_cars(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Car))).scalar_one()


async def list_cars_paginated(db: AsyncSession, page: int = 1, page_size: int = 10) -> Page[Car]:
    return await paginate(db, _newest_first(select(Car)), page, page_size)


async def search_cars(db: AsyncSession, term: str) -> list[Car]:
    result = await db.execute(_search(term))
    return list(result.scalars().all())


async def search_cars_paginated(db: AsyncSession, term: str, page: int = 1, page_size: int = 10) -> Page[Car]:
    return await paginate(db, _search(term), page, page_size)


async def get_car(db: AsyncSession, car_id: int) -> Car | None:
    return await db.get(Car, car_id)


async def get_car_with_services(db: AsyncSession, car_id: int) -> tuple[Car, list[Service]] | None:
    car = await get_car(db, car_id)
    if car is None:
        return None
    result = await db.execute(
        select(Service)
        .where(Service.car_id == car_id)
        .order_by(Service.start_date.desc())
        .limit(RECENT_SERVICES_PER_CAR)
    )
    return car, list(result.scalars().all())


async def create_car(db: AsyncSession, data: CarCreate) -> Car:
    car = Car(
        brand=data.brand,
        model=data.model,
        year=data.year,
        color=data.color,
        license_plate=data.license_plate,
        owner=data.owner,
    )
    db.add(car)
    await db.commit()
    await db.refresh(car)
    return car


async def update_car(db: AsyncSession, car_id: int, data: CarUpdate) -> Car | None:
    car = await get_car(db, car_id)
    if car is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(car, field, value)

    await db.commit()
    await db.refresh(car)
    return car


async def delete_car(db: AsyncSession, car_id: int) -> bool:
    """Delete a car; its services and their mechanic assignments go with it."""
    result = await db.execute(delete(Car).where(Car.id == car_id))
    await db.commit()
    return result.rowcount > 0
