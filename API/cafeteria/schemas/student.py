from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StudentRegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    enrolled_from: date
    enrolled_to: date

    @model_validator(mode="after")
    def _check_enrollment_window(self) -> "StudentRegisterRequest":
        if self.enrolled_from > self.enrolled_to:
            raise ValueError("enrolled_to must be greater than enrolled_from")
        return self


class TokenResponse(BaseModel):
    token: str


class StudentResponse(BaseModel):
    name: str
    enrolled_from: date
    enrolled_to: date
    created_on: datetime | None = None


class EnlistmentRequest(BaseModel):
    year: int
    week: int
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False


class EnlistmentResponse(BaseModel):
    id: int
    year: int
    week: int
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    created_on: datetime | None = None
