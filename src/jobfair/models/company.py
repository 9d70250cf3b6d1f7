"""Company and event participation models."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobfair.models.base import Base

if TYPE_CHECKING:
    from jobfair.models.event import Event
    from jobfair.models.job import Job
    from jobfair.models.user import AdminCompanyProfile


class Company(Base):
    """Company exhibiting at job fairs."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    code: Mapped[str] = mapped_column(String(6), unique=True, index=True)  # sign-up code
    description: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(String(500))
    location: Mapped[str | None] = mapped_column(String(255))
    logo_url: Mapped[str | None] = mapped_column(String(1000))

    # Relationships
    participations: Mapped[list["EventCompanyParticipation"]] = relationship(
        back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )
    jobs: Mapped[list["Job"]] = relationship(
        back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )
    admins: Mapped[list["AdminCompanyProfile"]] = relationship(
        back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )


class EventCompanyParticipation(Base):
    """A company's booth at an event."""

    __tablename__ = "event_company_participations"
    __table_args__ = (
        UniqueConstraint("event_id", "company_id", name="uq_participation_event_company"),
        UniqueConstraint("event_id", "stand_number", name="uq_participation_event_stand"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"))
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"))
    stand_number: Mapped[str] = mapped_column(String(50))

    # Relationships
    event: Mapped["Event"] = relationship(back_populates="participations")
    company: Mapped["Company"] = relationship(back_populates="participations")
