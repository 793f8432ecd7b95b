from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.queries import users as user_queries
from app.schemas.auth import UserResponse
from app.utils.response import success_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def get_users(q: str | None = None, db: AsyncSession = Depends(get_db)):
    users = await user_queries.search_users(db, q) if q else await user_queries.list_users(db)
    return success_response(data=[UserResponse.model_validate(u).model_dump(mode="json") for u in users])
