import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.auth import register_user_action
from app.actions.common import validate_form
from app.auth import authenticate, issue_session_token
from app.database import async_session, get_db
from app.dependencies import SessionUser, get_current_user
from app.queries import users as user_queries
from app.schemas.auth import LoginRequest, LoginResponse, UserResponse
from app.utils.exceptions import AppException
from app.utils.forms import read_form
from app.utils.response import redirect_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def _stamp_last_login(user_id: int) -> None:
    async with async_session() as db:
        await user_queries.update_last_login(db, user_id)


@router.post("/login")
async def login(request: Request, background_tasks: BackgroundTasks, db: AsyncSession = Depends(get_db)):
    credentials = validate_form(LoginRequest, await read_form(request))

    user = await authenticate(db, credentials.email, credentials.password)
    if user is None:
        logger.info("Rejected login for %s", credentials.email)
        raise AppException("Invalid credentials", status_code=400)

    background_tasks.add_task(_stamp_last_login, user.id)
    data = LoginResponse(access_token=issue_session_token(user), user=UserResponse.model_validate(user))
    return success_response(data=data.model_dump(mode="json"))


@router.post("/register", status_code=201)
async def register(request: Request, db: AsyncSession = Depends(get_db)):
    result = await register_user_action(db, await read_form(request))
    return redirect_response(result.redirect, message="Account created", user=result.data.model_dump(mode="json"))


@router.get("/me")
async def me(current_user: SessionUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    user = await user_queries.get_user(db, current_user.id)
    if user is None:
        raise AppException("User not found", status_code=404)
    return success_response(data=UserResponse.model_validate(user).model_dump(mode="json"))
