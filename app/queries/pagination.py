import math
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

LIKE_ESCAPE = "\\"


@dataclass
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, with wildcards in the term escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def ilike_any(columns: Sequence[Any], term: str):
    pattern = contains_pattern(term)
    return [column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns]


async def paginate(db: AsyncSession, stmt: Select, page: int = 1, page_size: int = 10) -> Page:
    """Run an offset page of ``stmt`` alongside its total row count."""
    page = max(1, page)
    page_size = max(1, page_size)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    result = await db.execute(stmt.limit(page_size).offset((page - 1) * page_size))
    return Page(items=result.scalars().all(), total=total, page=page, page_size=page_size)
