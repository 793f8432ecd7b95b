import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User
from app.queries import users as user_queries
from app.utils.exceptions import AppException

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both paths pay for one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=settings.bcrypt_rounds))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


async def authenticate(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user for a matching email/password pair, else None."""
    user = await user_queries.get_user_by_email(db, email)
    if user is None:
        bcrypt.checkpw(password.encode(), _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def issue_session_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "iat": now,
        "exp": now + timedelta(minutes=settings.token_expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)


def decode_session_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except jwt.ExpiredSignatureError:
        raise AppException("Session expired", status_code=401)
    except jwt.InvalidTokenError:
        raise AppException("Invalid session token", status_code=401)
