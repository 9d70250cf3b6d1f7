"""Event endpoints."""

from fastapi import APIRouter, HTTPException, status

from jobfair.api.deps import AdminUser, CompanyAdminUser, DbSession
from jobfair.models.event import Event
from jobfair.schemas.event import (
    EventCreate,
    EventDetails,
    EventResponse,
    EventUpdate,
    EventWithCounts,
    EventWithStats,
    JoinEventRequest,
    LeaveEventRequest,
    ParticipationResponse,
)
from jobfair.services.company_service import CompanyService
from jobfair.services.event_service import EventService

router = APIRouter()


async def _get_event_or_404(service: EventService, event_id: int) -> Event:
    event = await service.get_by_id(event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return event


@router.get("", response_model=list[EventWithCounts], name="events.findAll")
async def list_events(db: DbSession):
    """List events, latest first."""
    return await EventService(db).list_with_counts()


@router.get("/stats", response_model=list[EventWithStats], name="events.findAllWithStats")
async def list_events_with_stats(db: DbSession):
    return await EventService(db).list_with_counts(with_applications=True)


@router.get(
    "/available",
    response_model=list[EventResponse],
    name="events.getAvailableEvents",
)
async def list_available_events(db: DbSession, current_user: CompanyAdminUser):
    """Events the caller's company has not joined."""
    company = await CompanyService(db).get_for_admin(current_user)
    return await EventService(db).list_available(company)


@router.post(
    "/join",
    response_model=ParticipationResponse,
    status_code=status.HTTP_201_CREATED,
    name="events.joinEvent",
)
async def join_event(data: JoinEventRequest, db: DbSession, current_user: CompanyAdminUser):
    """Book a stand for the caller's company."""
    company = await CompanyService(db).get_for_admin(current_user)
    return await EventService(db).join_event(company, data.event_id, data.stand_number)


@router.post("/leave", name="events.leaveEvent")
async def leave_event(data: LeaveEventRequest, db: DbSession, current_user: CompanyAdminUser):
    company = await CompanyService(db).get_for_admin(current_user)
    await EventService(db).leave_event(company, data.event_id)
    return {"success": True, "message": "Left the event successfully"}


@router.get("/{event_id}", response_model=EventResponse, name="events.findOne")
async def get_event(event_id: int, db: DbSession):
    return await _get_event_or_404(EventService(db), event_id)


@router.get("/{event_id}/details", response_model=EventDetails, name="events.findOneWithDetails")
async def get_event_details(event_id: int, db: DbSession):
    """Event with participating companies and their stands."""
    details = await EventService(db).get_details(event_id)
    if not details:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return details


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    name="events.create",
)
async def create_event(data: EventCreate, db: DbSession, _: AdminUser):
    return await EventService(db).create(data)


@router.patch("/{event_id}", response_model=EventResponse, name="events.update")
async def update_event(event_id: int, data: EventUpdate, db: DbSession, _: AdminUser):
    service = EventService(db)
    event = await _get_event_or_404(service, event_id)
    return await service.update(event, data)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, name="events.delete")
async def delete_event(event_id: int, db: DbSession, _: AdminUser):
    service = EventService(db)
    event = await _get_event_or_404(service, event_id)
    await service.delete(event)
