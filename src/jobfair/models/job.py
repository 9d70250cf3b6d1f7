"""Job posting model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobfair.models.base import Base, JSONType

if TYPE_CHECKING:
    from jobfair.models.application import Application
    from jobfair.models.company import Company
    from jobfair.models.event import Event


class Job(Base):
    """Job posted by a company for a specific event."""

    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_event_company", "event_id", "company_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"))
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"))

    title: Mapped[str] = mapped_column(String(500), index=True)
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(255))
    tags: Mapped[list[str]] = mapped_column(JSONType, default=list)

    # Salary
    salary_min: Mapped[int | None] = mapped_column()
    salary_max: Mapped[int | None] = mapped_column()

    is_remote: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    company: Mapped["Company"] = relationship(back_populates="jobs")
    event: Mapped["Event"] = relationship(back_populates="jobs")
    applications: Mapped[list["Application"]] = relationship(
        back_populates="job", cascade="all, delete-orphan", passive_deletes=True
    )
