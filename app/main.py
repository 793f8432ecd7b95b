import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables, async_session, dispose_engine
from app.dependencies import get_current_user
from app.seed import seed_data
from app.routers.auth import router as auth_router
from app.routers.cars import router as cars_router
from app.routers.dashboard import router as dashboard_router
from app.routers.mechanics import router as mechanics_router
from app.routers.services import router as services_router
from app.routers.users import router as users_router
from app.utils.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    async with async_session() as session:
        await seed_data(session)
    logger.info("PitStop API ready")
    yield
    await dispose_engine()


app = FastAPI(
    title="PitStop API",
    description="Car inventory, mechanic roster and service appointments for a repair shop",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_auth_dep = [Depends(get_current_user)]

app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(cars_router, prefix=settings.api_prefix, dependencies=_auth_dep)
app.include_router(mechanics_router, prefix=settings.api_prefix, dependencies=_auth_dep)
app.include_router(services_router, prefix=settings.api_prefix, dependencies=_auth_dep)
app.include_router(dashboard_router, prefix=settings.api_prefix, dependencies=_auth_dep)
app.include_router(users_router, prefix=settings.api_prefix, dependencies=_auth_dep)


@app.get("/health")
async def health_check():
    return {"status": "success", "data": {"service": "pitstop-api", "version": VERSION}, "message": None}
