"""Data models for sessions, listings, applications and notifications."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import ClassVar, Iterable, Union

from jobboard.errors import InvalidField, InvalidRange


class Role(str, Enum):
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"


class EmploymentKind(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    FREELANCE = "freelance"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    INTERVIEW_SCHEDULED = "interview-scheduled"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").capitalize()


ALL_KINDS = "all"


# ── Sessions ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CandidateSession:
    id: str
    email: str
    display_name: str
    role: ClassVar[Role] = Role.CANDIDATE


@dataclass(frozen=True)
class RecruiterSession:
    id: str
    email: str
    display_name: str
    organization: str
    role: ClassVar[Role] = Role.RECRUITER


Session = Union[CandidateSession, RecruiterSession]


# ── Listings ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Salary:
    minimum: int
    maximum: int
    currency: str = "$"


@dataclass(frozen=True)
class JobListing:
    id: str
    title: str
    recruiter_id: str
    organization: str
    location: str
    kind: EmploymentKind
    salary: Salary
    description: str
    requirements: tuple[str, ...]
    benefits: tuple[str, ...]
    posted_at: datetime
    active: bool = True


def split_list(raw: str | Iterable[str] | None) -> list[str]:
    """Comma-separated text (or an iterable) → stripped, non-empty items."""
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    return [str(i).strip() for i in items if str(i).strip()]


def _parse_amount(name: str, raw: object) -> int:
    if isinstance(raw, bool):
        raise InvalidField(name, "must be a whole number")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip().replace(",", "")
    if not text:
        raise InvalidField(name, "is required")
    try:
        return int(text)
    except ValueError:
        raise InvalidField(name, "must be a whole number") from None


def parse_kind(raw: str | EmploymentKind) -> EmploymentKind:
    try:
        return EmploymentKind(raw)
    except ValueError:
        allowed = ", ".join(k.value for k in EmploymentKind)
        raise InvalidField("kind", f"must be one of {allowed}") from None


@dataclass
class ListingFields:
    """Editable listing fields, checked once by ``validate`` before any write."""

    title: str
    location: str
    kind: EmploymentKind | str
    salary_min: int
    salary_max: int
    description: str
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    currency: str = "$"

    @classmethod
    def from_form(
        cls,
        *,
        title: str,
        location: str,
        kind: str,
        salary_min: str | int,
        salary_max: str | int,
        description: str,
        requirements: str | Iterable[str] = "",
        benefits: str | Iterable[str] = "",
        currency: str = "$",
    ) -> "ListingFields":
        return cls(
            title=title,
            location=location,
            kind=parse_kind(kind),
            salary_min=_parse_amount("salary_min", salary_min),
            salary_max=_parse_amount("salary_max", salary_max),
            description=description,
            requirements=split_list(requirements),
            benefits=split_list(benefits),
            currency=currency,
        )

    @classmethod
    def from_listing(cls, listing: JobListing) -> "ListingFields":
        return cls(
            title=listing.title,
            location=listing.location,
            kind=listing.kind,
            salary_min=listing.salary.minimum,
            salary_max=listing.salary.maximum,
            description=listing.description,
            requirements=list(listing.requirements),
            benefits=list(listing.benefits),
            currency=listing.salary.currency,
        )

    def validate(self) -> "ListingFields":
        """Return a cleaned copy, or raise ``InvalidField`` / ``InvalidRange``."""
        cleaned: dict[str, str] = {}
        for name in ("title", "location", "description"):
            raw = getattr(self, name)
            if raw is not None and not isinstance(raw, str):
                raise InvalidField(name, "must be text")
            value = (raw or "").strip()
            if not value:
                raise InvalidField(name, "is required")
            cleaned[name] = value

        kind = parse_kind(self.kind)
        lo = _parse_amount("salary_min", self.salary_min)
        hi = _parse_amount("salary_max", self.salary_max)
        if lo < 0:
            raise InvalidField("salary_min", "cannot be negative")
        if hi < 0:
            raise InvalidField("salary_max", "cannot be negative")
        if lo > hi:
            raise InvalidRange(lo, hi)

        return replace(
            self,
            kind=kind,
            salary_min=lo,
            salary_max=hi,
            requirements=split_list(self.requirements),
            benefits=split_list(self.benefits),
            currency=(self.currency or "$").strip() or "$",
            **cleaned,
        )


@dataclass(frozen=True)
class FilterCriteria:
    query: str = ""
    kind: EmploymentKind | str = ALL_KINDS


# ── Applications & notifications ─────────────────────────────────────────


@dataclass(frozen=True)
class Interview:
    at: datetime
    location: str
    notes: str = ""


@dataclass(frozen=True)
class Application:
    id: str
    listing_id: str
    recruiter_id: str
    job_title: str
    organization: str
    candidate_id: str
    candidate_name: str
    candidate_email: str
    applied_at: datetime
    status: ApplicationStatus = ApplicationStatus.PENDING
    resume: str | None = None
    cover_letter: str | None = None
    feedback: str | None = None
    interview: Interview | None = None


NOTIFICATION_KINDS: tuple[str, ...] = (
    "application_status", "interview_scheduled", "job_match", "message",
)
PRIORITIES: tuple[str, ...] = ("low", "medium", "high")


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    kind: str
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    priority: str = "medium"


# ── Profiles ─────────────────────────────────────────────────────────────

CANDIDATE_PROFILE_FIELDS: tuple[str, ...] = (
    "phone", "location", "bio", "skills", "experience", "education", "linkedin", "cv_ref",
)
RECRUITER_PROFILE_FIELDS: tuple[str, ...] = ("phone", "location", "bio", "website")


@dataclass(frozen=True)
class Profile:
    """Extra details a user fills in after registering.

    ``cv_ref`` is an opaque reference (an uploaded file name or a link); the
    document itself is never stored.
    """

    user_id: str
    phone: str = ""
    location: str = ""
    bio: str = ""
    skills: tuple[str, ...] = ()
    experience: str = ""
    education: str = ""
    linkedin: str = ""
    website: str = ""
    cv_ref: str | None = None
    updated_at: datetime | None = None

    @property
    def is_blank(self) -> bool:
        return self.updated_at is None
