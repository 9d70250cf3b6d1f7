"""User-related database models."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobfair.models.base import Base, JSONType

if TYPE_CHECKING:
    from jobfair.models.application import Application
    from jobfair.models.company import Company


class Role(str, Enum):
    """Account role."""

    ADMIN = "ADMIN"
    ADMIN_COMPANY = "ADMIN_COMPANY"
    JOB_SEEKER = "JOB_SEEKER"


class User(Base):
    """Platform account - admin, company admin or job seeker."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, values_callable=lambda obj: [e.value for e in obj]),
        default=Role.JOB_SEEKER,
    )
    is_blocked: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    job_seeker_profile: Mapped["JobSeekerProfile"] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    company_profile: Mapped["AdminCompanyProfile"] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    applications: Mapped[list["Application"]] = relationship(
        back_populates="job_seeker", cascade="all, delete-orphan", passive_deletes=True
    )


class JobSeekerProfile(Base):
    """Job seeker's personal, education and contact details."""

    __tablename__ = "job_seeker_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )

    full_name: Mapped[str] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text)

    # Education
    last_education_level: Mapped[str | None] = mapped_column(String(100), index=True)
    graduation_year: Mapped[int | None] = mapped_column()
    institution_name: Mapped[str | None] = mapped_column(String(255))

    skills: Mapped[list[str]] = mapped_column(JSONType, default=list)
    social_links: Mapped[list[dict]] = mapped_column(JSONType, default=list)  # [{type, url}]

    # Documents
    resume_url: Mapped[str | None] = mapped_column(String(1000))
    portfolio_url: Mapped[str | None] = mapped_column(String(1000))

    # Private information
    nik: Mapped[str | None] = mapped_column(String(32))  # national ID number
    phone_numbers: Mapped[list[str]] = mapped_column(JSONType, default=list)

    # Relationship
    user: Mapped["User"] = relationship(back_populates="job_seeker_profile")

    @property
    def is_complete(self) -> bool:
        """A profile is complete once it carries a non-blank full name."""
        return bool(self.full_name and self.full_name.strip())


class AdminCompanyProfile(Base):
    """Links a company-admin account to the company it manages."""

    __tablename__ = "admin_company_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), index=True
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="company_profile")
    company: Mapped["Company"] = relationship(back_populates="admins")
