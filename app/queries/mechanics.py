from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.mechanic import Mechanic
from app.queries.pagination import ilike_any
from app.schemas.mechanic import MechanicCreate, MechanicUpdate

SEARCH_COLUMNS = (Mechanic.first_name, Mechanic.last_name, Mechanic.email)


def _by_name(stmt):
    return stmt.order_by(Mechanic.last_name, Mechanic.first_name, Mechanic.id)


async def list_mechanics(db: AsyncSession) -> list[Mechanic]:
    result = await db.execute(_by_name(select(Mechanic)))
    return list(result.scalars().all())


async def count_mechanics(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Mechanic))).scalar_one()


async def get_mechanic(db: AsyncSession, mechanic_id: int) -> Mechanic | None:
    return await db.get(Mechanic, mechanic_id)


async def create_mechanic(db: AsyncSession, data: MechanicCreate) -> Mechanic:
    mechanic = Mechanic(
        first_name=data.first_name,
        last_name=data.last_name,
        years_experience=data.years_experience,
        email=data.email,
    )
    db.add(mechanic)
    await db.commit()
    await db.refresh(mechanic)
    return mechanic


async def update_mechanic(db: AsyncSession, mechanic_id: int, data: MechanicUpdate) -> Mechanic | None:
    mechanic = await get_mechanic(db, mechanic_id)
    if mechanic is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(mechanic, field, value)

    await db.commit()
    await db.refresh(mechanic)
    return mechanic


async def delete_mechanic(db: AsyncSession, mechanic_id: int) -> bool:
    result = await db.execute(delete(Mechanic).where(Mechanic.id == mechanic_id))
    await db.commit()
    return result.rowcount > 0


async def search_mechanics(db: AsyncSession, term: str) -> list[Mechanic]:
    result = await db.execute(
        _by_name(select(Mechanic).where(or_(*ilike_any(SEARCH_COLUMNS, term))))
    )
    return list(result.scalars().all())
