"""Single-session identity: register, log in, log out, restore on startup.

The whole account lives in one record under one storage key, so registering
again simply replaces the previous account.  The password is kept in that
record because there is no server to check it against later.
"""
from __future__ import annotations

import json
import uuid
from typing import Any

from jobboard.config import DEFAULT_SESSION_KEY
from jobboard.errors import InvalidCredentials, NotRegistered
from jobboard.log import get_logger
from jobboard.models import CandidateSession, RecruiterSession, Role, Session
from jobboard.storage import KeyValueStore

log = get_logger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def _to_record(session: Session, password: str) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": session.id,
        "email": session.email,
        "display_name": session.display_name,
        "role": session.role.value,
        "password": password,
    }
    if isinstance(session, RecruiterSession):
        record["organization"] = session.organization
    return record


def _from_record(record: dict[str, Any]) -> Session:
    """Rebuild a session; raises KeyError/ValueError/TypeError on a bad record."""
    role = Role(record["role"])
    common = {
        "id": str(record["id"]),
        "email": str(record["email"]),
        "display_name": str(record["display_name"]),
    }
    if role is Role.RECRUITER:
        return RecruiterSession(organization=str(record.get("organization") or ""), **common)
    return CandidateSession(**common)


class SessionStore:
    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_SESSION_KEY) -> None:
        self._storage = storage
        self._key = key
        self._current: Session | None = None
        stored = self._load_record()
        if stored is not None:
            self._current = _from_record(stored)
            log.info("Restored %s session for %s", self._current.role.value, self._current.display_name)

    # ── persistence ──────────────────────────────────────────────────────

    def _load_record(self) -> dict[str, Any] | None:
        """The stored record, or None when absent or unusable."""
        raw = self._storage.get(self._key)
        if not raw:
            return None
        try:
            record = json.loads(raw)
            if not isinstance(record, dict):
                raise TypeError("session record is not an object")
            _from_record(record)
        except (ValueError, KeyError, TypeError) as exc:
            log.warning("Ignoring malformed stored session: %s", exc)
            return None
        return record

    def _persist(self, session: Session, password: str) -> None:
        self._storage.set(self._key, json.dumps(_to_record(session, password)))

    # ── operations ───────────────────────────────────────────────────────

    def register(
        self,
        email: str,
        password: str,
        display_name: str,
        role: Role | str,
        organization: str | None = None,
    ) -> Session:
        role = Role(role)
        session: Session
        if role is Role.RECRUITER:
            session = RecruiterSession(
                id=_new_id(),
                email=email,
                display_name=display_name,
                organization=organization or "",
            )
        else:
            session = CandidateSession(id=_new_id(), email=email, display_name=display_name)

        self._persist(session, password)
        self._current = session
        log.info("Registered %s account for %s", role.value, display_name)
        return session

    def login(self, email: str, password: str, role: Role | str) -> Session:
        role_value = str(getattr(role, "value", role))
        record = self._load_record()
        if record is None:
            raise NotRegistered()

        matches = (
            record.get("email") == email
            and record.get("password") == password
            and record.get("role") == role_value
        )
        if not matches:
            log.info("Rejected %s sign-in attempt", role_value)
            raise InvalidCredentials()

        session = _from_record(record)
        self._persist(session, password)
        self._current = session
        log.info("Signed in %s as %s", session.display_name, session.role.value)
        return session

    def logout(self) -> None:
        if self._current is not None:
            log.info("Signed out %s", self._current.display_name)
        self._current = None
        self._storage.remove(self._key)

    def current_session(self) -> Session | None:
        return self._current

    @property
    def current(self) -> Session | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None
