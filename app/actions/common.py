import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.utils.exceptions import AppException, ValidationFailed, field_errors

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", bound=BaseModel)


@dataclass
class ActionResult:
    redirect: str
    data: Any = None


def validate_form(schema: type[FormT], form: Mapping[str, Any]) -> FormT:
    try:
        return schema.model_validate(dict(form))
    except ValidationError as exc:
        raise ValidationFailed(field_errors(exc))


@asynccontextmanager
async def persistence_errors(message: str):
    """Collapse database failures into one user-facing message."""
    try:
        yield
    except SQLAlchemyError:
        logger.exception("Database error: %s", message)
        raise AppException(message, status_code=500)
