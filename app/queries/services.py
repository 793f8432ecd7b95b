from collections import defaultdict
from typing import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import transaction
from app.models.car import Car
from app.models.mechanic import Mechanic
from app.models.service import Service, ServiceMechanic, ServiceStatus
from app.queries.pagination import ilike_any
from app.schemas.car import CarResponse
from app.schemas.mechanic import MechanicResponse
from app.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate, ServiceWithDetails, StatusCount

SEARCH_COLUMNS = (Service.notes, Car.brand, Car.model, Car.license_plate)


async def attach_details(db: AsyncSession, services: Sequence[Service]) -> list[ServiceWithDetails]:
    """Attach each service's car and assigned mechanics, keeping input order."""
    if not services:
        return []

    car_ids = {s.car_id for s in services}
    cars = {
        car.id: car
        for car in (await db.execute(select(Car).where(Car.id.in_(car_ids)))).scalars()
    }

    mechanics_by_service: dict[int, list[Mechanic]] = defaultdict(list)
    rows = await db.execute(
        select(ServiceMechanic.service_id, Mechanic)
        .join(Mechanic, Mechanic.id == ServiceMechanic.mechanic_id)
        .where(ServiceMechanic.service_id.in_([s.id for s in services]))
        .order_by(ServiceMechanic.id)
    )
    for service_id, mechanic in rows:
        mechanics_by_service[service_id].append(mechanic)

    details = []
    for service in services:
        car = cars.get(service.car_id)
        details.append(ServiceWithDetails(
            **ServiceResponse.model_validate(service).model_dump(),
            car=CarResponse.model_validate(car) if car else None,
            mechanics=[MechanicResponse.model_validate(m) for m in mechanics_by_service[service.id]],
        ))
    return details


def _assignments(service_id: int, mechanic_ids: Sequence[int]) -> list[ServiceMechanic]:
    return [ServiceMechanic(service_id=service_id, mechanic_id=m) for m in mechanic_ids]


async def list_services(db: AsyncSession, status: ServiceStatus | str | None = None) -> list[Service]:
    stmt = select(Service)
    if status:
        stmt = stmt.where(Service.status == ServiceStatus(status).value)
    result = await db.execute(stmt.order_by(Service.start_date.desc(), Service.id.desc()))
    return list(result.scalars().all())


async def get_service(db: AsyncSession, service_id: int) -> Service | None:
    return await db.get(Service, service_id)


async def get_service_with_details(db: AsyncSession, service_id: int) -> ServiceWithDetails | None:
    service = await get_service(db, service_id)
    if service is None:
        return None
    return (await attach_details(db, [service]))[0]


async def create_service(db: AsyncSession, data: ServiceCreate) -> ServiceWithDetails:
    """Insert the service and its mechanic assignments as one transaction."""
    async with transaction(db):
        service = Service(
            car_id=data.car_id,
            start_date=data.start_date,
            end_date=data.end_date,
            status=ServiceStatus(data.status).value,
            notes=data.notes,
        )
        db.add(service)
        await db.flush()
        db.add_all(_assignments(service.id, data.mechanic_ids))

    await db.refresh(service)
    return (await attach_details(db, [service]))[0]


async def update_service(db: AsyncSession, service_id: int, data: ServiceUpdate) -> ServiceWithDetails | None:
    """Apply the submitted fields; a submitted mechanic list replaces the current one."""
    service = await get_service(db, service_id)
    if service is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    mechanic_ids = changes.pop("mechanic_ids", None)
    if "status" in changes:
        changes["status"] = ServiceStatus(changes["status"]).value

    async with transaction(db):
        for field, value in changes.items():
            setattr(service, field, value)
        service.updated_at = func.now()

        if mechanic_ids is not None:
            await db.execute(
                delete(ServiceMechanic)
                .where(ServiceMechanic.service_id == service_id)
                .execution_options(synchronize_session=False)
            )
            db.add_all(_assignments(service_id, mechanic_ids))

    await db.refresh(service)
    return (await attach_details(db, [service]))[0]


async def delete_service(db: AsyncSession, service_id: int) -> bool:
    """Delete a service; its mechanic assignments are removed with it."""
    result = await db.execute(delete(Service).where(Service.id == service_id))
    await db.commit()
    return result.rowcount > 0


async def list_services_by_car(db: AsyncSession, car_id: int) -> list[Service]:
    result = await db.execute(
        select(Service)
        .where(Service.car_id == car_id)
        .order_by(Service.start_date.desc(), Service.id.desc())
    )
    return list(result.scalars().all())


async def list_services_by_mechanic(db: AsyncSession, mechanic_id: int) -> list[ServiceWithDetails]:
    result = await db.execute(
        select(Service)
        .join(ServiceMechanic, ServiceMechanic.service_id == Service.id)
        .where(ServiceMechanic.mechanic_id == mechanic_id)
        .order_by(Service.start_date.desc(), Service.id.desc())
    )
    return await attach_details(db, result.scalars().all())


async def list_recent_services(db: AsyncSession, limit: int = 5) -> list[ServiceWithDetails]:
    result = await db.execute(
        select(Service).order_by(Service.created_at.desc(), Service.id.desc()).limit(limit)
    )
    return await attach_details(db, result.scalars().all())


async def count_services_by_status(db: AsyncSession) -> list[StatusCount]:
    result = await db.execute(
        select(Service.status, func.count(Service.id)).group_by(Service.status).order_by(Service.status)
    )
    return [StatusCount(status=status, count=count) for status, count in result.all()]


async def search_services(db: AsyncSession, term: str) -> list[Service]:
    result = await db.execute(
        select(Service)
        .join(Car, Car.id == Service.car_id)
        .where(or_(*ilike_any(SEARCH_COLUMNS, term)))
        .order_by(Service.start_date.desc(), Service.id.desc())
    )
    return list(result.scalars().all())
