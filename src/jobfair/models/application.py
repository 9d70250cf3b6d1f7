"""Application-related database models."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SQLEnum, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobfair.models.base import Base

if TYPE_CHECKING:
    from jobfair.models.job import Job
    from jobfair.models.user import User


class ApplicationStatus(str, Enum):
    """Application status."""

    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


def _status_enum(name: str) -> SQLEnum:
    return SQLEnum(
        ApplicationStatus,
        name=name,
        values_callable=lambda obj: [e.value for e in obj],
    )


class Application(Base):
    """A job seeker's application to a job."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_seeker_id", "job_id", name="uq_application_job_seeker_job"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    job_seeker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), index=True)

    status: Mapped[ApplicationStatus] = mapped_column(
        _status_enum("applicationstatus"),
        default=ApplicationStatus.PENDING,
    )

    # Relationships
    job_seeker: Mapped["User"] = relationship(back_populates="applications")
    job: Mapped["Job"] = relationship(back_populates="applications")
    history: Mapped[list["ApplicationProcessHistory"]] = relationship(
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ApplicationProcessHistory.id",
    )


class ApplicationProcessHistory(Base):
    """Append-only log of application status changes."""

    __tablename__ = "application_process_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    application_id: Mapped[int] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[ApplicationStatus] = mapped_column(_status_enum("historystatus"))
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationship
    application: Mapped["Application"] = relationship(back_populates="history")
