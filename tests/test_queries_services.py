from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.models.service import ServiceMechanic, ServiceStatus
from app.queries import cars as car_queries
from app.queries import mechanics as mechanic_queries
from app.queries import services as service_queries
from app.schemas.car import CarCreate
from app.schemas.mechanic import MechanicCreate
from app.schemas.service import ServiceCreate, ServiceUpdate


@pytest_asyncio.fixture
async def car(db):
    return await car_queries.create_car(
        db, CarCreate(brand="Toyota", model="Corolla", year=2020, color="Blue", license_plate="ABC-123")
    )


@pytest_asyncio.fixture
async def mechanics(db):
    return [
        await mechanic_queries.create_mechanic(
            db, MechanicCreate(first_name="Mike", last_name="Smith", years_experience=10)
        ),
        await mechanic_queries.create_mechanic(
            db, MechanicCreate(first_name="Sarah", last_name="Johnson", years_experience=5)
        ),
    ]


async def _assignment_count(db, service_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(ServiceMechanic).where(ServiceMechanic.service_id == service_id)
    )
    return result.scalar_one()


def _service(car_id: int, mechanic_ids: list[int], **overrides) -> ServiceCreate:
    fields = {
        "car_id": car_id,
        "start_date": "2026-01-15T09:00:00",
        "status": "scheduled",
        "mechanic_ids": mechanic_ids,
    }
    fields.update(overrides)
    return ServiceCreate(**fields)


@pytest.mark.asyncio
async def test_create_service_with_details(db, car, mechanics):
    created = await service_queries.create_service(
        db,
        _service(
            car.id,
            [m.id for m in mechanics],
            end_date="2026-01-16T17:00:00",
            notes="Oil change",
        ),
    )

    assert created.car_id == car.id
    assert created.start_date == datetime(2026, 1, 15, 9, 0)
    assert created.end_date == datetime(2026, 1, 16, 17, 0)
    assert created.status == "scheduled"
    assert created.notes == "Oil change"
    assert created.car.brand == "Toyota"
    assert [m.id for m in created.mechanics] == [m.id for m in mechanics]


@pytest.mark.asyncio
async def test_create_service_optional_fields_null(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [mechanics[0].id], notes=""))

    service = await service_queries.get_service(db, created.id)
    assert service.end_date is None
    assert service.notes is None


@pytest.mark.asyncio
async def test_create_service_with_unknown_mechanic_is_atomic(db, car, mechanics):
    with pytest.raises(IntegrityError):
        await service_queries.create_service(db, _service(car.id, [mechanics[0].id, 999999]))

    assert await service_queries.list_services(db) == []


@pytest.mark.asyncio
async def test_create_service_with_unknown_car_fails(db, mechanics):
    with pytest.raises(IntegrityError):
        await service_queries.create_service(db, _service(999999, [mechanics[0].id]))


@pytest.mark.asyncio
async def test_get_service_with_details_missing(db):
    assert await service_queries.get_service_with_details(db, 999999) is None


@pytest.mark.asyncio
async def test_update_service_partial_keeps_fields_and_mechanics(db, car, mechanics):
    created = await service_queries.create_service(
        db, _service(car.id, [m.id for m in mechanics], notes="Brakes")
    )

    updated = await service_queries.update_service(db, created.id, ServiceUpdate(status="in_progress"))

    assert updated.status == "in_progress"
    assert updated.notes == "Brakes"
    assert updated.start_date == created.start_date
    assert len(updated.mechanics) == 2


@pytest.mark.asyncio
async def test_update_service_replaces_mechanics(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [mechanics[0].id]))

    updated = await service_queries.update_service(
        db, created.id, ServiceUpdate(mechanic_ids=[mechanics[1].id])
    )

    assert [m.id for m in updated.mechanics] == [mechanics[1].id]
    assert await _assignment_count(db, created.id) == 1


@pytest.mark.asyncio
async def test_update_service_rolls_back_on_bad_mechanic(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [mechanics[0].id], notes="Brakes"))

    with pytest.raises(IntegrityError):
        await service_queries.update_service(
            db, created.id, ServiceUpdate(notes="Changed", mechanic_ids=[999999])
        )

    details = await service_queries.get_service_with_details(db, created.id)
    assert details.notes == "Brakes"
    assert [m.id for m in details.mechanics] == [mechanics[0].id]


@pytest.mark.asyncio
async def test_update_service_missing_returns_none(db):
    assert await service_queries.update_service(db, 999999, ServiceUpdate(notes="x")) is None


@pytest.mark.asyncio
async def test_delete_service_removes_assignments(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [m.id for m in mechanics]))

    assert await service_queries.delete_service(db, created.id) is True
    assert await service_queries.get_service(db, created.id) is None
    assert await _assignment_count(db, created.id) == 0
    assert await service_queries.delete_service(db, created.id) is False


@pytest.mark.asyncio
async def test_delete_mechanic_removes_assignment_only(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [m.id for m in mechanics]))

    await mechanic_queries.delete_mechanic(db, mechanics[0].id)

    details = await service_queries.get_service_with_details(db, created.id)
    assert [m.id for m in details.mechanics] == [mechanics[1].id]


@pytest.mark.asyncio
async def test_list_services_filters_and_orders(db, car, mechanics):
    ids = [mechanics[0].id]
    older = await service_queries.create_service(db, _service(car.id, ids, start_date="2026-01-01T09:00:00"))
    newer = await service_queries.create_service(
        db, _service(car.id, ids, start_date="2026-02-01T09:00:00", status="completed")
    )

    assert [s.id for s in await service_queries.list_services(db)] == [newer.id, older.id]
    assert [s.id for s in await service_queries.list_services(db, ServiceStatus.COMPLETED)] == [newer.id]
    assert await service_queries.list_services(db, "cancelled") == []


@pytest.mark.asyncio
async def test_list_services_by_car_and_mechanic(db, car, mechanics):
    other_car = await car_queries.create_car(db, CarCreate(brand="Ford", model="Focus", year=2018, color="Red"))
    first = await service_queries.create_service(db, _service(car.id, [mechanics[0].id]))
    second = await service_queries.create_service(db, _service(other_car.id, [mechanics[1].id]))

    assert [s.id for s in await service_queries.list_services_by_car(db, car.id)] == [first.id]

    by_mechanic = await service_queries.list_services_by_mechanic(db, mechanics[1].id)
    assert [s.id for s in by_mechanic] == [second.id]
    assert by_mechanic[0].car.brand == "Ford"


@pytest.mark.asyncio
async def test_list_recent_services(db, car, mechanics):
    created = [
        await service_queries.create_service(db, _service(car.id, [mechanics[0].id]))
        for _ in range(7)
    ]

    recent = await service_queries.list_recent_services(db, limit=5)

    assert len(recent) == 5
    assert recent[0].id == created[-1].id
    assert recent[0].mechanics[0].id == mechanics[0].id


@pytest.mark.asyncio
async def test_count_services_by_status(db, car, mechanics):
    ids = [mechanics[0].id]
    await service_queries.create_service(db, _service(car.id, ids, status="in_progress"))
    await service_queries.create_service(db, _service(car.id, ids, status="in_progress"))
    await service_queries.create_service(db, _service(car.id, ids, status="completed"))

    counts = {c.status: c.count for c in await service_queries.count_services_by_status(db)}

    assert counts == {"completed": 1, "in_progress": 2}


@pytest.mark.asyncio
async def test_search_services(db, car, mechanics):
    created = await service_queries.create_service(db, _service(car.id, [mechanics[0].id], notes="Replace timing BELT"))

    assert [s.id for s in await service_queries.search_services(db, "timing belt")] == [created.id]
    assert [s.id for s in await service_queries.search_services(db, "corolla")] == [created.id]
    assert [s.id for s in await service_queries.search_services(db, "abc-1")] == [created.id]
    assert await service_queries.search_services(db, "transmission") == []
