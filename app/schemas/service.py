from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.models.service import ServiceStatus
from app.schemas.car import CarResponse
from app.schemas.mechanic import MechanicResponse
from app.schemas.validators import blank_to_none


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ServiceCreate(BaseModel):
    car_id: int
    start_date: datetime
    end_date: datetime | None = None
    status: ServiceStatus = ServiceStatus.SCHEDULED
    notes: str | None = None
    mechanic_ids: list[int] = Field(default_factory=list, validate_default=True)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("car_id", mode="before")
    @classmethod
    def _require_car(cls, value):
        if blank_to_none(value) is None:
            raise ValueError("Car is required")
        return value

    @field_validator("start_date", mode="before")
    @classmethod
    def _require_start_date(cls, value):
        if blank_to_none(value) is None:
            raise ValueError("Start date is required")
        return value

    @field_validator("end_date", "notes", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        return blank_to_none(value)

    @field_validator("mechanic_ids")
    @classmethod
    def _check_mechanics(cls, value):
        if value is None:
            return None
        if not value:
            raise ValueError("At least one mechanic is required")
        # one join row per mechanic, first occurrence wins
        return list(dict.fromkeys(value))

    @field_validator("end_date")
    @classmethod
    def _check_end_date(cls, value, info: ValidationInfo):
        start_date = info.data.get("start_date")
        if value is None or start_date is None:
            return value
        if _as_utc(value) < _as_utc(start_date):
            raise ValueError("End date cannot be before start date")
        return value

    @field_validator("status")
    @classmethod
    def _check_status(cls, value):
        if value is None:
            raise ValueError("Status is required")
        return value


class ServiceUpdate(ServiceCreate):
    car_id: int | None = None
    start_date: datetime | None = None
    status: ServiceStatus | None = None
    mechanic_ids: list[int] | None = None


class ServiceResponse(BaseModel):
    id: int
    car_id: int
    start_date: datetime
    end_date: datetime | None = None
    status: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ServiceWithDetails(ServiceResponse):
    car: CarResponse | None = None
    mechanics: list[MechanicResponse] = []


class StatusCount(BaseModel):
    status: str
    count: int


class CarWithServices(CarResponse):
    services: list[ServiceResponse] = []


class MechanicWithServices(MechanicResponse):
    services: list[ServiceWithDetails] = []
