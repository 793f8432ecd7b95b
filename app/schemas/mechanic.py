from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.validators import blank_to_none, check_email, check_length

MAX_YEARS_EXPERIENCE = 100


class MechanicCreate(BaseModel):
    first_name: str
    last_name: str
    years_experience: int
    email: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value):
        return blank_to_none(value)

    @field_validator("first_name")
    @classmethod
    def _check_first_name(cls, value):
        return check_length(value, "First name", 50)

    @field_validator("last_name")
    @classmethod
    def _check_last_name(cls, value):
        return check_length(value, "Last name", 50)

    @field_validator("years_experience")
    @classmethod
    def _check_years_experience(cls, value):
        if value is None:
            raise ValueError("Years of experience is required")
        if value < 0:
            raise ValueError("Years of experience cannot be negative")
        if value > MAX_YEARS_EXPERIENCE:
            raise ValueError(f"Years of experience has a maximum of {MAX_YEARS_EXPERIENCE}")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        return check_email(value)


class MechanicUpdate(MechanicCreate):
    first_name: str | None = None
    last_name: str | None = None
    years_experience: int | None = None


class MechanicResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    years_experience: int
    email: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
