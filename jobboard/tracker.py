"""Track job applications: candidates apply, recruiters work their inbox."""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime

from jobboard.catalog import ListingCatalog
from jobboard.clock import SystemClock
from jobboard.errors import AlreadyApplied, InvalidField, NotFound, Unauthorized
from jobboard.log import get_logger
from jobboard.models import (
    Application,
    ApplicationStatus,
    CandidateSession,
    Interview,
    RecruiterSession,
    Session,
)
from jobboard.notifications import NotificationCenter

log = get_logger(__name__)

ALL_STATUSES = "all"

_STATUS_TITLES: dict[ApplicationStatus, str] = {
    ApplicationStatus.PENDING: "Application Update",
    ApplicationStatus.REVIEWING: "Application Under Review",
    ApplicationStatus.INTERVIEW_SCHEDULED: "Interview Scheduled",
    ApplicationStatus.ACCEPTED: "Application Accepted",
    ApplicationStatus.REJECTED: "Application Rejected",
}


def parse_status(raw: str | ApplicationStatus) -> ApplicationStatus:
    try:
        return ApplicationStatus(raw)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise InvalidField("status", f"must be one of {allowed}") from None


class ApplicationTracker:
    def __init__(
        self,
        catalog: ListingCatalog,
        notifications: NotificationCenter,
        clock=None,
    ) -> None:
        self._catalog = catalog
        self._notifications = notifications
        self._clock = clock or SystemClock()
        # newest first
        self._apps: list[Application] = []

    def _index_of(self, application_id: str) -> int:
        for i, app in enumerate(self._apps):
            if app.id == application_id:
                return i
        raise NotFound("Application", application_id)

    def _owned_index(self, actor: Session | None, application_id: str) -> int:
        idx = self._index_of(application_id)
        if not isinstance(actor, RecruiterSession) or actor.id != self._apps[idx].recruiter_id:
            raise Unauthorized("Only the recruiter who posted this job can review its applications.")
        return idx

    # ── candidate side ───────────────────────────────────────────────────

    def apply(
        self,
        actor: Session | None,
        listing_id: str,
        cover_letter: str | None = None,
        resume: str | None = None,
    ) -> Application:
        if not isinstance(actor, CandidateSession):
            raise Unauthorized("Only candidates can apply for jobs.")
        listing = self._catalog.get(listing_id)
        if any(a.listing_id == listing_id and a.candidate_id == actor.id for a in self._apps):
            raise AlreadyApplied(listing.title)

        app = Application(
            id=uuid.uuid4().hex[:10],
            listing_id=listing.id,
            recruiter_id=listing.recruiter_id,
            job_title=listing.title,
            organization=listing.organization,
            candidate_id=actor.id,
            candidate_name=actor.display_name,
            candidate_email=actor.email,
            applied_at=self._clock.now(),
            resume=(resume or "").strip() or None,
            cover_letter=(cover_letter or "").strip() or None,
        )
        self._apps.insert(0, app)
        self._notifications.push(
            listing.recruiter_id,
            "message",
            "New Application",
            f"{actor.display_name} applied for {listing.title}.",
            priority="medium",
        )
        log.info("Tracked: %s @ %s [%s]", app.job_title, app.organization, app.status.value)
        return app

    def for_candidate(
        self, actor: Session | None, status: str | ApplicationStatus = ALL_STATUSES
    ) -> list[Application]:
        if not isinstance(actor, CandidateSession):
            raise Unauthorized("Only candidates have an application history.")
        mine = [a for a in self._apps if a.candidate_id == actor.id]
        if status == ALL_STATUSES:
            return mine
        wanted = parse_status(status)
        return [a for a in mine if a.status is wanted]

    # ── recruiter side ───────────────────────────────────────────────────

    def inbox(self, actor: Session | None, listing_id: str | None = None) -> list[Application]:
        if not isinstance(actor, RecruiterSession):
            raise Unauthorized("Only recruiters have an application inbox.")
        return [
            a for a in self._apps
            if a.recruiter_id == actor.id and (listing_id is None or a.listing_id == listing_id)
        ]

    def update_status(
        self,
        actor: Session | None,
        application_id: str,
        status: str | ApplicationStatus,
        feedback: str | None = None,
    ) -> Application:
        idx = self._owned_index(actor, application_id)
        new_status = parse_status(status)

        app = self._apps[idx]
        changes: dict = {"status": new_status}
        if feedback is not None:
            changes["feedback"] = feedback.strip() or None
        updated = replace(app, **changes)
        self._apps[idx] = updated

        message = f"Your application for {app.job_title} at {app.organization} is now {new_status.label.lower()}."
        if updated.feedback:
            message += f" {updated.feedback}"
        self._notifications.push(
            app.candidate_id,
            "application_status",
            _STATUS_TITLES[new_status],
            message,
            priority="medium" if new_status is ApplicationStatus.REJECTED else "high",
        )
        log.debug("Updated %s → %s", application_id, new_status.value)
        return updated

    def schedule_interview(
        self,
        actor: Session | None,
        application_id: str,
        at: datetime,
        location: str,
        notes: str = "",
    ) -> Application:
        idx = self._owned_index(actor, application_id)
        location = (location or "").strip()
        if not location:
            raise InvalidField("location", "is required")

        app = self._apps[idx]
        updated = replace(
            app,
            status=ApplicationStatus.INTERVIEW_SCHEDULED,
            interview=Interview(at=at, location=location, notes=(notes or "").strip()),
        )
        self._apps[idx] = updated
        self._notifications.push(
            app.candidate_id,
            "interview_scheduled",
            "Interview Scheduled",
            f"Interview for {app.job_title} scheduled for {at.strftime('%b %d, %Y at %I:%M %p')}, {location}",
            priority="high",
        )
        log.info("Interview scheduled: %s for %s", app.candidate_name, app.job_title)
        return updated

    def count_for(self, listing_id: str) -> int:
        return sum(1 for a in self._apps if a.listing_id == listing_id)
