import logging
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.common import ActionResult, validate_form
from app.auth import hash_password
from app.queries import users as user_queries
from app.schemas.auth import RegisterRequest, UserResponse
from app.utils.exceptions import AppException

logger = logging.getLogger(__name__)


async def register_user_action(db: AsyncSession, form: Mapping[str, Any]) -> ActionResult:
    data = validate_form(RegisterRequest, form)

    try:
        if await user_queries.get_user_by_email(db, data.email) is not None:
            raise AppException("Email already registered", status_code=400)

        user = await user_queries.create_user(
            db,
            email=data.email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )
    except SQLAlchemyError:
        logger.exception("Registration failed for %s", data.email)
        raise AppException("Failed to create account. Please try again.", status_code=500)

    logger.info("Registered user id=%s", user.id)
    return ActionResult(redirect="/login", data=UserResponse.model_validate(user))
