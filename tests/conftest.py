import asyncio
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_pitstop.sqlite3"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEED_DEMO_USER"] = "true"

import pytest
import pytest_asyncio

TEST_DB_PATH = "./test_pitstop.sqlite3"


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    from app.database import create_tables

    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)
    asyncio.run(create_tables())
    yield
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture(autouse=True)
def seed_user(setup_test_db):
    """Empty every table, clear cached views and re-create the demo user."""
    from app.config import settings
    from app.database import Base, async_session
    from app.queries.users import get_user_by_email
    from app.seed import seed_data
    from app.utils.cache import view_cache

    async def _reset():
        async with async_session() as session:
            for table in reversed(Base.metadata.sorted_tables):
                await session.execute(table.delete())
            await session.commit()
            await seed_data(session)
            return await get_user_by_email(session, settings.demo_user_email)

    user = asyncio.run(_reset())
    view_cache.clear()
    return user


@pytest.fixture
def auth_headers(seed_user):
    from app.auth import issue_session_token

    return {"Authorization": f"Bearer {issue_session_token(seed_user)}"}


@pytest_asyncio.fixture
async def db():
    from app.database import async_session

    async with async_session() as session:
        yield session
