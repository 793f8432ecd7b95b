import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import hash_password
from app.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

SEED_USER_FIRST_NAME = "Shop"
SEED_USER_LAST_NAME = "Admin"


async def seed_data(session: AsyncSession) -> None:
    """Create the demo account on an empty user table."""
    if not settings.seed_demo_user:
        return

    result = await session.execute(select(User).limit(1))
    if result.scalars().first() is not None:
        return

    session.add(User(
        email=settings.demo_user_email,
        password_hash=hash_password(settings.demo_user_password),
        first_name=SEED_USER_FIRST_NAME,
        last_name=SEED_USER_LAST_NAME,
    ))
    await session.commit()
    logger.info("Seeded demo user %s", settings.demo_user_email)
