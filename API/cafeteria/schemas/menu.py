from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MenuRequest(BaseModel):
    year: int
    week: int
    monday: str = Field(min_length=1, max_length=255)
    tuesday: str = Field(min_length=1, max_length=255)
    wednesday: str = Field(min_length=1, max_length=255)
    thursday: str = Field(min_length=1, max_length=255)
    friday: str | None = Field(default=None, max_length=255)


class MenuResponse(BaseModel):
    id: int
    year: int
    week: int
    monday: str
    tuesday: str
    wednesday: str
    thursday: str
    friday: str | None = None
    created_on: datetime | None = None
