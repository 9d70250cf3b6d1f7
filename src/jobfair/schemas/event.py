"""Event-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    """Schema for creating an event."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    banner_url: str = Field(..., min_length=1, max_length=1000)
    minimap_url: str = Field(..., min_length=1, max_length=1000)
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)


class EventUpdate(BaseModel):
    """Schema for updating an event. Only provided fields change."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    banner_url: str | None = Field(None, max_length=1000)
    minimap_url: str | None = Field(None, max_length=1000)
    date: datetime | None = None
    location: str | None = Field(None, max_length=255)


class EventResponse(BaseModel):
    """Schema for event response."""

    id: int
    title: str
    description: str | None
    banner_url: str | None
    minimap_url: str | None
    date: datetime
    location: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EventWithCounts(EventResponse):
    participation_count: int = 0
    job_count: int = 0


class EventWithStats(EventWithCounts):
    application_count: int = 0


class ParticipatingCompany(BaseModel):
    id: int
    name: str
    stand_number: str
    job_count: int


class EventDetails(EventWithStats):
    """Event with its participating companies."""

    participating_companies: list[ParticipatingCompany] = []


class JoinEventRequest(BaseModel):
    event_id: int = Field(..., ge=1)
    stand_number: str = Field(..., min_length=1, max_length=50)

    model_config = {"str_strip_whitespace": True}


class LeaveEventRequest(BaseModel):
    event_id: int = Field(..., ge=1)


class ParticipationResponse(BaseModel):
    id: int
    event_id: int
    company_id: int
    stand_number: str
    created_at: datetime

    model_config = {"from_attributes": True}
