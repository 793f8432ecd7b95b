from pydantic import BaseModel

from app.schemas.service import ServiceWithDetails, StatusCount


class DashboardResponse(BaseModel):
    total_cars: int
    total_mechanics: int
    active_services: int
    status_counts: list[StatusCount]
    recent_services: list[ServiceWithDetails]
