from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class Athlete(BaseModel):
    id: int
    username: str | None = None
    first_name: str | None = Field(default=None, validation_alias=AliasChoices("firstname", "first_name"))
    last_name: str | None = Field(default=None, validation_alias=AliasChoices("lastname", "last_name"))
    city: str | None = None


class SummaryActivity(BaseModel):
    id: int
    name: str
    start_date: str  # ISO-8601, kept exactly as Strava sent it


class ActivityUpdate(BaseModel):
    """Body of PUT /activities/{id}. Only the title is ever rewritten."""

    name: str
