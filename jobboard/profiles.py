"""Per-user profile details, kept in memory and keyed by session id."""
from __future__ import annotations

from dataclasses import replace

from jobboard.clock import SystemClock
from jobboard.errors import InvalidField, Unauthorized
from jobboard.log import get_logger
from jobboard.models import (
    CANDIDATE_PROFILE_FIELDS,
    RECRUITER_PROFILE_FIELDS,
    Profile,
    RecruiterSession,
    Session,
    split_list,
)

log = get_logger(__name__)


def _allowed_fields(actor: Session) -> tuple[str, ...]:
    if isinstance(actor, RecruiterSession):
        return RECRUITER_PROFILE_FIELDS
    return CANDIDATE_PROFILE_FIELDS


def _clean(name: str, value: object) -> object:
    if name == "skills":
        return tuple(split_list(value))
    text = "" if value is None else str(value).strip()
    if name == "cv_ref":
        return text or None
    return text


class ProfileBook:
    def __init__(self, clock=None) -> None:
        self._clock = clock or SystemClock()
        self._profiles: dict[str, Profile] = {}

    def get(self, actor: Session | None) -> Profile:
        """The actor's saved profile, or a blank one if nothing was saved yet."""
        if actor is None:
            raise Unauthorized("Sign in to view your profile.")
        return self._profiles.get(actor.id) or Profile(user_id=actor.id)

    def save(self, actor: Session | None, **changes: object) -> Profile:
        """Merge ``changes`` into the actor's profile.

        Fields not shown for the actor's role raise ``InvalidField`` and
        nothing is stored.
        """
        if actor is None:
            raise Unauthorized("Sign in to edit your profile.")
        allowed = _allowed_fields(actor)
        cleaned = {}
        for name, value in changes.items():
            if name not in allowed:
                raise InvalidField(name, f"is not part of a {actor.role.value} profile")
            cleaned[name] = _clean(name, value)

        profile = replace(self.get(actor), updated_at=self._clock.now(), **cleaned)
        self._profiles[actor.id] = profile
        log.info("Saved %s profile for %s (%d field(s))", actor.role.value, actor.display_name, len(cleaned))
        return profile

    def __len__(self) -> int:
        return len(self._profiles)
