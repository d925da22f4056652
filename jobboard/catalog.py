"""Job listings: recruiter-owned CRUD plus public browsing and filtering."""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import timedelta
from typing import Any, Iterable

from jobboard.clock import SystemClock
from jobboard.errors import InvalidField, NotFound, Unauthorized
from jobboard.log import get_logger
from jobboard.models import (
    ALL_KINDS,
    EmploymentKind,
    FilterCriteria,
    JobListing,
    ListingFields,
    RecruiterSession,
    Salary,
    Session,
    parse_kind,
)

log = get_logger(__name__)


def _matches_query(listing: JobListing, needle: str) -> bool:
    return (
        needle in listing.title.lower()
        or needle in listing.organization.lower()
        or needle in listing.location.lower()
    )


class ListingCatalog:
    def __init__(self, clock=None) -> None:
        self._clock = clock or SystemClock()
        # newest first
        self._listings: list[JobListing] = []

    # ── helpers ──────────────────────────────────────────────────────────

    def _new_id(self) -> str:
        taken = {j.id for j in self._listings}
        while True:
            ident = uuid.uuid4().hex[:9]
            if ident not in taken:
                return ident

    def _index_of(self, listing_id: str) -> int:
        for i, listing in enumerate(self._listings):
            if listing.id == listing_id:
                return i
        raise NotFound("Job listing", listing_id)

    def _owned_index(self, actor: Session | None, listing_id: str) -> int:
        idx = self._index_of(listing_id)
        if actor is None or actor.id != self._listings[idx].recruiter_id:
            raise Unauthorized("Only the recruiter who posted this job can change it.")
        return idx

    # ── mutations ────────────────────────────────────────────────────────

    def create(self, actor: Session | None, fields: ListingFields) -> JobListing:
        if not isinstance(actor, RecruiterSession):
            raise Unauthorized("Only recruiters can post jobs.")
        clean = fields.validate()

        listing = JobListing(
            id=self._new_id(),
            title=clean.title,
            recruiter_id=actor.id,
            organization=actor.organization,
            location=clean.location,
            kind=clean.kind,
            salary=Salary(clean.salary_min, clean.salary_max, clean.currency),
            description=clean.description,
            requirements=tuple(clean.requirements),
            benefits=tuple(clean.benefits),
            posted_at=self._clock.now(),
            active=True,
        )
        self._listings.insert(0, listing)
        log.info("Listing created: %s @ %s (%s)", listing.title, listing.organization, listing.id)
        return listing

    def update(self, actor: Session | None, listing_id: str, fields: ListingFields) -> JobListing:
        idx = self._owned_index(actor, listing_id)
        clean = fields.validate()

        updated = replace(
            self._listings[idx],
            title=clean.title,
            location=clean.location,
            kind=clean.kind,
            salary=Salary(clean.salary_min, clean.salary_max, clean.currency),
            description=clean.description,
            requirements=tuple(clean.requirements),
            benefits=tuple(clean.benefits),
        )
        self._listings[idx] = updated
        log.info("Listing updated: %s (%s)", updated.title, updated.id)
        return updated

    def delete(self, actor: Session | None, listing_id: str) -> None:
        idx = self._owned_index(actor, listing_id)
        removed = self._listings.pop(idx)
        log.info("Listing deleted: %s (%s)", removed.title, removed.id)

    # ── reads ────────────────────────────────────────────────────────────

    def list(self) -> list[JobListing]:
        return list(self._listings)

    def get(self, listing_id: str) -> JobListing:
        return self._listings[self._index_of(listing_id)]

    def owned_by(self, actor: Session | None) -> list[JobListing]:
        if actor is None:
            return []
        return [j for j in self._listings if j.recruiter_id == actor.id]

    def filter(self, criteria: FilterCriteria) -> list[JobListing]:
        kind = criteria.kind if criteria.kind == ALL_KINDS else parse_kind(criteria.kind)
        needle = (criteria.query or "").lower()

        result = self.list()
        if needle:
            result = [j for j in result if _matches_query(j, needle)]
        if kind != ALL_KINDS:
            result = [j for j in result if j.kind is kind]
        return result

    def __len__(self) -> int:
        return len(self._listings)

    # ── seeding ──────────────────────────────────────────────────────────

    def seed(self, entries: Iterable[dict[str, Any]]) -> int:
        """Load listings that already exist (e.g. from YAML), keeping file order.

        Entries are validated like recruiter input but are not tied to a session.
        """
        now = self._clock.now()
        loaded: list[JobListing] = []
        taken = {j.id for j in self._listings}
        for entry in entries:
            clean = ListingFields.from_form(
                title=entry.get("title", ""),
                location=entry.get("location", ""),
                kind=entry.get("kind", EmploymentKind.FULL_TIME.value),
                salary_min=entry.get("salary_min", ""),
                salary_max=entry.get("salary_max", ""),
                description=entry.get("description", ""),
                requirements=entry.get("requirements") or [],
                benefits=entry.get("benefits") or [],
                currency=entry.get("currency", "$"),
            ).validate()
            ident = str(entry.get("id") or self._new_id())
            if ident in taken:
                raise InvalidField("id", f"duplicate listing id '{ident}' in seed data")
            taken.add(ident)
            loaded.append(
                JobListing(
                    id=ident,
                    title=clean.title,
                    recruiter_id=str(entry.get("recruiter_id", "")),
                    organization=str(entry.get("organization", "")),
                    location=clean.location,
                    kind=clean.kind,
                    salary=Salary(clean.salary_min, clean.salary_max, clean.currency),
                    description=clean.description,
                    requirements=tuple(clean.requirements),
                    benefits=tuple(clean.benefits),
                    posted_at=now - timedelta(days=float(entry.get("posted_days_ago", 0))),
                    active=bool(entry.get("active", True)),
                )
            )
        self._listings.extend(loaded)
        log.info("Seeded %d listing(s)", len(loaded))
        return len(loaded)
