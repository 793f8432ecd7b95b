import pytest
from sqlalchemy import select

from app.models.service import Service
from app.queries import cars as car_queries
from app.queries import mechanics as mechanic_queries
from app.queries import services as service_queries
from app.schemas.car import CarCreate, CarUpdate
from app.schemas.mechanic import MechanicCreate
from app.schemas.service import ServiceCreate


def _car(**overrides) -> CarCreate:
    fields = {
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "color": "Blue",
        "license_plate": "ABC-123",
        "owner": "John Doe",
    }
    fields.update(overrides)
    return CarCreate(**fields)


@pytest.mark.asyncio
async def test_create_car_round_trips_all_fields(db):
    created = await car_queries.create_car(db, _car())

    car = await car_queries.get_car(db, created.id)
    assert car is not None
    assert car.brand == "Toyota"
    assert car.model == "Corolla"
    assert car.year == 2020
    assert car.color == "Blue"
    assert car.license_plate == "ABC-123"
    assert car.owner == "John Doe"
    assert car.created_at is not None


@pytest.mark.asyncio
async def test_create_car_optional_fields_are_null(db):
    created = await car_queries.create_car(db, CarCreate(brand="Honda", model="Civic", year=2019, color="Red"))

    assert created.license_plate is None
    assert created.owner is None


@pytest.mark.asyncio
async def test_create_car_blank_optional_fields_are_null(db):
    created = await car_queries.create_car(db, _car(license_plate="", owner="   "))

    assert created.license_plate is None
    assert created.owner is None


@pytest.mark.asyncio
async def test_get_car_missing_returns_none(db):
    assert await car_queries.get_car(db, 99999) is None


@pytest.mark.asyncio
async def test_list_cars_newest_first(db):
    first = await car_queries.create_car(db, _car(brand="First"))
    second = await car_queries.create_car(db, _car(brand="Second"))

    cars = await car_queries.list_cars(db)
    assert [c.id for c in cars] == [second.id, first.id]


@pytest.mark.asyncio
async def test_count_cars(db):
    await car_queries.create_car(db, _car())
    await car_queries.create_car(db, _car(brand="Honda"))

    assert await car_queries.count_cars(db) == 2


@pytest.mark.asyncio
async def test_update_car_partial_keeps_other_fields(db):
    created = await car_queries.create_car(db, _car())

    updated = await car_queries.update_car(db, created.id, CarUpdate(color="Black"))

    assert updated is not None
    assert updated.color == "Black"
    assert updated.brand == "Toyota"
    assert updated.model == "Corolla"
    assert updated.year == 2020
    assert updated.license_plate == "ABC-123"
    assert updated.owner == "John Doe"


@pytest.mark.asyncio
async def test_update_car_can_clear_nullable_field(db):
    created = await car_queries.create_car(db, _car())

    updated = await car_queries.update_car(db, created.id, CarUpdate(owner=None))

    assert updated.owner is None
    assert updated.license_plate == "ABC-123"


@pytest.mark.asyncio
async def test_update_car_missing_returns_none(db):
    assert await car_queries.update_car(db, 99999, CarUpdate(color="Black")) is None


@pytest.mark.asyncio
async def test_delete_car(db):
    created = await car_queries.create_car(db, _car())

    assert await car_queries.delete_car(db, created.id) is True
    assert await car_queries.get_car(db, created.id) is None
    assert await car_queries.delete_car(db, created.id) is False


@pytest.mark.asyncio
async def test_delete_car_cascades_to_services(db):
    car = await car_queries.create_car(db, _car())
    mechanic = await mechanic_queries.create_mechanic(
        db, MechanicCreate(first_name="Mike", last_name="Smith", years_experience=10)
    )
    service = await service_queries.create_service(
        db, ServiceCreate(car_id=car.id, start_date="2026-01-15T09:00:00", mechanic_ids=[mechanic.id])
    )

    assert await car_queries.delete_car(db, car.id) is True

    remaining = (await db.execute(select(Service).where(Service.id == service.id))).scalars().all()
    assert remaining == []
    assert await mechanic_queries.get_mechanic(db, mechanic.id) is not None


@pytest.mark.asyncio
async def test_search_cars_case_insensitive(db):
    await car_queries.create_car(db, _car(brand="Toyota", model="Corolla", owner="Alice"))
    await car_queries.create_car(db, _car(brand="Ford", model="Focus", owner="Bob"))

    assert [c.brand for c in await car_queries.search_cars(db, "toYOTA")] == ["Toyota"]
    assert [c.brand for c in await car_queries.search_cars(db, "foc")] == ["Ford"]
    assert [c.brand for c in await car_queries.search_cars(db, "ALI")] == ["Toyota"]


@pytest.mark.asyncio
async def test_search_cars_no_match_is_empty(db):
    await car_queries.create_car(db, _car())

    assert await car_queries.search_cars(db, "Lamborghini") == []


@pytest.mark.asyncio
async def test_search_cars_treats_wildcards_literally(db):
    await car_queries.create_car(db, _car(brand="Toyota"))

    assert await car_queries.search_cars(db, "%") == []
    assert await car_queries.search_cars(db, "T_yota") == []


@pytest.mark.asyncio
async def test_list_cars_paginated(db):
    for i in range(12):
        await car_queries.create_car(db, _car(brand=f"Brand{i}"))

    first = await car_queries.list_cars_paginated(db, page=1, page_size=5)
    last = await car_queries.list_cars_paginated(db, page=3, page_size=5)

    assert first.total == 12
    assert first.total_pages == 3
    assert len(first.items) == 5
    assert first.items[0].brand == "Brand11"
    assert len(last.items) == 2


@pytest.mark.asyncio
async def test_search_cars_paginated_counts_matches_only(db):
    for i in range(3):
        await car_queries.create_car(db, _car(brand="Toyota", model=f"Model{i}"))
    await car_queries.create_car(db, _car(brand="Ford"))

    page = await car_queries.search_cars_paginated(db, "toyota", page=1, page_size=2)

    assert page.total == 3
    assert page.total_pages == 2
    assert all(c.brand == "Toyota" for c in page.items)


@pytest.mark.asyncio
async def test_get_car_with_services(db):
    car = await car_queries.create_car(db, _car())
    mechanic = await mechanic_queries.create_mechanic(
        db, MechanicCreate(first_name="Mike", last_name="Smith", years_experience=10)
    )
    await service_queries.create_service(
        db, ServiceCreate(car_id=car.id, start_date="2026-01-10T09:00:00", mechanic_ids=[mechanic.id])
    )
    await service_queries.create_service(
        db, ServiceCreate(car_id=car.id, start_date="2026-02-10T09:00:00", mechanic_ids=[mechanic.id])
    )

    found, services = await car_queries.get_car_with_services(db, car.id)

    assert found.id == car.id
    assert len(services) == 2
    assert services[0].start_date > services[1].start_date
    assert await car_queries.get_car_with_services(db, 99999) is None
