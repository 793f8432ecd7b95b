from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.service import ServiceStatus
from app.queries import cars as car_queries
from app.queries import mechanics as mechanic_queries
from app.queries import services as service_queries
from app.schemas.dashboard import DashboardResponse
from app.utils.cache import cached_view
from app.utils.response import success_response

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_SERVICES = 5


@router.get("")
async def get_dashboard(request: Request, db: AsyncSession = Depends(get_db)):
    async def build():
        total_cars = await car_queries.count_cars(db)
        total_mechanics = await mechanic_queries.count_mechanics(db)
        recent = await service_queries.list_recent_services(db, RECENT_SERVICES)
        counts = await service_queries.count_services_by_status(db)

        active = next((c.count for c in counts if c.status == ServiceStatus.IN_PROGRESS.value), 0)
        return DashboardResponse(
            total_cars=total_cars,
            total_mechanics=total_mechanics,
            active_services=active,
            status_counts=counts,
            recent_services=recent,
        ).model_dump(mode="json")

    return success_response(data=await cached_view(request, build))
