"""Event model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobfair.models.base import Base

if TYPE_CHECKING:
    from jobfair.models.company import EventCompanyParticipation
    from jobfair.models.job import Job


class Event(Base):
    """Career fair event."""

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    banner_url: Mapped[str | None] = mapped_column(String(1000))
    minimap_url: Mapped[str | None] = mapped_column(String(1000))  # venue floor plan
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    location: Mapped[str | None] = mapped_column(String(255))

    # Relationships
    participations: Mapped[list["EventCompanyParticipation"]] = relationship(
        back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
    jobs: Mapped[list["Job"]] = relationship(
        back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
