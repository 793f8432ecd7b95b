from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.validators import blank_to_none, check_length

MIN_YEAR = 1900


class CarCreate(BaseModel):
    brand: str
    model: str
    year: int
    color: str
    license_plate: str | None = None
    owner: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("license_plate", "owner", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        return blank_to_none(value)

    @field_validator("brand")
    @classmethod
    def _check_brand(cls, value):
        return check_length(value, "Brand", 100)

    @field_validator("model")
    @classmethod
    def _check_model(cls, value):
        return check_length(value, "Model", 100)

    @field_validator("color")
    @classmethod
    def _check_color(cls, value):
        return check_length(value, "Color", 50)

    @field_validator("license_plate")
    @classmethod
    def _check_license_plate(cls, value):
        return check_length(value, "License plate", 20, required=False)

    @field_validator("owner")
    @classmethod
    def _check_owner(cls, value):
        return check_length(value, "Owner name", 200, required=False)

    @field_validator("year")
    @classmethod
    def _check_year(cls, value):
        if value is None:
            raise ValueError("Year is required")
        if value < MIN_YEAR:
            raise ValueError(f"Year must be {MIN_YEAR} or later")
        if value > date.today().year + 1:
            raise ValueError("Year cannot be more than next year")
        return value


class CarUpdate(CarCreate):
    """Partial car form: only the submitted fields are applied."""

    brand: str | None = None
    model: str | None = None
    year: int | None = None
    color: str | None = None


class CarResponse(BaseModel):
    id: int
    brand: str
    model: str
    year: int
    color: str
    license_plate: str | None = None
    owner: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CarPage(BaseModel):
    items: list[CarResponse]
    total: int
    total_pages: int
    page: int
    page_size: int

    model_config = {"from_attributes": True}
