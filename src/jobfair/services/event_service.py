"""Event management and participation service."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobfair.exceptions import (
    AlreadyJoinedEventError,
    EventHasJobsError,
    NotFoundError,
    NotParticipatingError,
    StandNumberTakenError,
)
from jobfair.models.application import Application
from jobfair.models.company import Company, EventCompanyParticipation
from jobfair.models.event import Event
from jobfair.models.job import Job
from jobfair.schemas.event import EventCreate, EventResponse, EventUpdate

logger = structlog.get_logger()


def _participation_count():
    return (
        select(func.count(EventCompanyParticipation.id))
        .where(EventCompanyParticipation.event_id == Event.id)
        .scalar_subquery()
    )


def _job_count():
    return select(func.count(Job.id)).where(Job.event_id == Event.id).scalar_subquery()


def _application_count():
    return (
        select(func.count(Application.id))
        .join(Job, Application.job_id == Job.id)
        .where(Job.event_id == Event.id)
        .scalar_subquery()
    )


class EventService:
    """Service for event-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, event_id: int) -> Event | None:
        """Get event by ID."""
        result = await self.db.execute(select(Event).where(Event.id == event_id))
        return result.scalar_one_or_none()

    async def list_with_counts(self, with_applications: bool = False) -> list[dict]:
        """List events, latest date first, with participation and job counts."""
        columns = [
            Event,
            _participation_count().label("participation_count"),
            _job_count().label("job_count"),
        ]
        if with_applications:
            columns.append(_application_count().label("application_count"))

        result = await self.db.execute(select(*columns).order_by(Event.date.desc()))

        events = []
        for row in result.all():
            data = EventResponse.model_validate(row.Event).model_dump()
            data["participation_count"] = row.participation_count
            data["job_count"] = row.job_count
            if with_applications:
                data["application_count"] = row.application_count
            events.append(data)
        return events

    async def get_details(self, event_id: int) -> dict | None:
        """Get an event with participating companies, stands and job counts."""
        result = await self.db.execute(
            select(Event)
            .options(
                selectinload(Event.participations).selectinload(
                    EventCompanyParticipation.company
                ),
                selectinload(Event.jobs),
            )
            .where(Event.id == event_id)
        )
        event = result.scalar_one_or_none()
        if not event:
            return None

        application_count = 0
        if event.jobs:
            result = await self.db.execute(
                select(func.count(Application.id)).where(
                    Application.job_id.in_([job.id for job in event.jobs])
                )
            )
            application_count = result.scalar_one()

        data = EventResponse.model_validate(event).model_dump()
        data.update(
            participation_count=len(event.participations),
            job_count=len(event.jobs),
            application_count=application_count,
            participating_companies=[
                {
                    "id": p.company.id,
                    "name": p.company.name,
                    "stand_number": p.stand_number,
                    "job_count": sum(1 for job in event.jobs if job.company_id == p.company_id),
                }
                for p in event.participations
            ],
        )
        return data

    async def create(self, data: EventCreate) -> Event:
        """Create a new event."""
        event = Event(**data.model_dump())
        self.db.add(event)
        await self.db.flush()

        logger.info("event_created", event_id=event.id, title=event.title)
        return event

    async def update(self, event: Event, data: EventUpdate) -> Event:
        """Update provided fields of an event."""
        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field in ("title", "date"):
                continue
            setattr(event, field, value)

        await self.db.flush()
        logger.info("event_updated", event_id=event.id, fields=sorted(update_data))
        return event

    async def delete(self, event: Event) -> None:
        await self.db.delete(event)
        await self.db.flush()
        logger.info("event_deleted", event_id=event.id)

    # Participation

    async def get_participation(
        self, event_id: int, company_id: int
    ) -> EventCompanyParticipation | None:
        result = await self.db.execute(
            select(EventCompanyParticipation).where(
                EventCompanyParticipation.event_id == event_id,
                EventCompanyParticipation.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_available(self, company: Company) -> list[Event]:
        """Events the company has not joined yet."""
        joined = select(EventCompanyParticipation.event_id).where(
            EventCompanyParticipation.company_id == company.id
        )
        result = await self.db.execute(
            select(Event).where(Event.id.not_in(joined)).order_by(Event.date.desc())
        )
        return list(result.scalars().all())

    async def is_stand_taken(self, event_id: int, stand_number: str) -> bool:
        result = await self.db.execute(
            select(EventCompanyParticipation.id).where(
                EventCompanyParticipation.event_id == event_id,
                EventCompanyParticipation.stand_number == stand_number,
            )
        )
        return result.scalar_one_or_none() is not None

    async def join_event(
        self, company: Company, event_id: int, stand_number: str
    ) -> EventCompanyParticipation:
        """Book a stand for the company at an event.

        A company joins an event at most once and a stand number belongs to
        one company per event.
        """
        if not await self.get_by_id(event_id):
            raise NotFoundError("Event not found")

        if await self.get_participation(event_id, company.id):
            raise AlreadyJoinedEventError()

        if await self.is_stand_taken(event_id, stand_number):
            raise StandNumberTakenError(stand_number)

        company_id = company.id
        participation = EventCompanyParticipation(
            event_id=event_id,
            company_id=company_id,
            stand_number=stand_number,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(participation)
        except IntegrityError:
            # Another request booked between the checks and the insert
            logger.info("event_join_conflict", event_id=event_id, company_id=company_id)
            if await self.get_participation(event_id, company_id):
                raise AlreadyJoinedEventError()
            raise StandNumberTakenError(stand_number)

        logger.info(
            "event_joined",
            event_id=event_id,
            company_id=company_id,
            stand_number=stand_number,
        )
        return participation

    async def leave_event(self, company: Company, event_id: int) -> None:
        """Withdraw the company from an event it has no jobs posted for."""
        participation = await self.get_participation(event_id, company.id)
        if not participation:
            raise NotParticipatingError()

        result = await self.db.execute(
            select(func.count(Job.id)).where(
                Job.event_id == event_id,
                Job.company_id == company.id,
            )
        )
        job_count = result.scalar_one()
        if job_count > 0:
            raise EventHasJobsError(
                f"Cannot leave this event while your company has {job_count} "
                "job(s) posted for it. Delete them first."
            )

        await self.db.delete(participation)
        await self.db.flush()
        logger.info("event_left", event_id=event_id, company_id=company.id)
