"""
Unit tests for jobboard/session.py
"""
import json

import pytest

from jobboard.errors import InvalidCredentials, NotRegistered
from jobboard.models import CandidateSession, RecruiterSession, Role
from jobboard.session import SessionStore
from jobboard.storage import MemoryStore


class TestRegister:
    """Tests for SessionStore.register."""

    def test_candidate_has_no_organization(self, sessions):
        """Candidates never carry an organization, even if one is passed."""
        user = sessions.register("a@b.com", "pw", "Ann", "candidate", organization="Ignored Inc")
        assert isinstance(user, CandidateSession)
        assert user.role is Role.CANDIDATE
        assert not hasattr(user, "organization")

    def test_recruiter_keeps_organization(self, sessions):
        """Recruiters keep the organization given at registration."""
        user = sessions.register("r@b.com", "pw", "Rex", Role.RECRUITER, organization="TechCorp")
        assert isinstance(user, RecruiterSession)
        assert user.organization == "TechCorp"

    def test_becomes_current_and_is_persisted(self, sessions, store):
        """Registering signs the user in and writes the record through."""
        user = sessions.register("a@b.com", "pw", "Ann", "candidate")
        assert sessions.current_session() == user
        assert sessions.is_authenticated
        record = json.loads(store.get("user"))
        assert record["email"] == "a@b.com"
        assert record["role"] == "candidate"
        assert "organization" not in record

    def test_fresh_identifiers(self, sessions):
        """Each registration gets a new identifier."""
        first = sessions.register("a@b.com", "pw", "Ann", "candidate")
        second = sessions.register("a@b.com", "pw", "Ann", "candidate")
        assert first.id != second.id

    def test_second_registration_replaces_first(self, sessions):
        """Only one account is stored; the newest one wins."""
        sessions.register("old@b.com", "pw", "Old", "candidate")
        new = sessions.register("new@b.com", "pw2", "New", "candidate")
        with pytest.raises(InvalidCredentials):
            sessions.login("old@b.com", "pw", "candidate")
        assert sessions.login("new@b.com", "pw2", "candidate") == new


class TestLogin:
    """Tests for SessionStore.login."""

    @pytest.fixture
    def registered(self, sessions):
        return sessions.register("r@b.com", "hunter2", "Rex", "recruiter", "TechCorp")

    def test_not_registered(self, sessions):
        """Logging in with nothing stored fails with NotRegistered."""
        with pytest.raises(NotRegistered):
            sessions.login("a@b.com", "pw", "candidate")

    def test_matching_credentials(self, registered, sessions):
        """All three fields matching signs the stored account in."""
        user = sessions.login("r@b.com", "hunter2", "recruiter")
        assert user == registered
        assert sessions.current_session() == registered

    @pytest.mark.parametrize(
        "email,password,role",
        [
            ("x@b.com", "hunter2", "recruiter"),
            ("R@b.com", "hunter2", "recruiter"),
            ("r@b.com", "wrong", "recruiter"),
            ("r@b.com", "hunter2", "candidate"),
            ("r@b.com", "hunter2", "admin"),
            ("r@b.com", "hunter2", ""),
        ],
    )
    def test_any_mismatch_is_invalid(self, registered, sessions, email, password, role):
        """A single mismatched field yields InvalidCredentials."""
        with pytest.raises(InvalidCredentials):
            sessions.login(email, password, role)

    def test_failed_login_has_no_side_effects(self, registered, store, sessions):
        """A rejected login leaves both memory and storage untouched."""
        before = store.get("user")
        with pytest.raises(InvalidCredentials):
            sessions.login("r@b.com", "nope", "recruiter")
        assert store.get("user") == before
        assert sessions.current_session() == registered

    def test_failed_login_when_signed_out_stays_signed_out(self, store):
        """After logout there is nothing to log into."""
        sessions = SessionStore(store)
        sessions.register("a@b.com", "pw", "Ann", "candidate")
        sessions.logout()
        with pytest.raises(NotRegistered):
            sessions.login("a@b.com", "pw", "candidate")
        assert sessions.current_session() is None

    def test_login_from_a_new_process(self, store):
        """A stored record from an earlier run can be logged into."""
        original = SessionStore(store).register("a@b.com", "pw", "Ann", "candidate")
        later = SessionStore(store)
        assert later.login("a@b.com", "pw", "candidate") == original


class TestLogout:
    """Tests for SessionStore.logout."""

    def test_clears_memory_and_storage(self, sessions, store):
        """Logout forgets the session and removes the stored record."""
        sessions.register("a@b.com", "pw", "Ann", "candidate")
        sessions.logout()
        assert sessions.current_session() is None
        assert store.get("user") is None

    def test_idempotent(self, sessions):
        """Logging out twice is harmless."""
        sessions.logout()
        sessions.logout()
        assert sessions.current is None


class TestRestore:
    """Tests for restoring the session at startup."""

    def test_round_trip_recruiter(self, store):
        """A registered recruiter is restored equal in every field."""
        user = SessionStore(store).register("r@b.com", "pw", "Rex", "recruiter", "TechCorp")
        restored = SessionStore(store).current_session()
        assert restored == user
        assert isinstance(restored, RecruiterSession)
        assert restored.organization == "TechCorp"

    def test_round_trip_candidate(self, store):
        """A candidate is restored without an organization."""
        user = SessionStore(store).register("a@b.com", "pw", "Ann", "candidate")
        restored = SessionStore(store).current_session()
        assert restored == user
        assert isinstance(restored, CandidateSession)

    def test_missing_record(self):
        """Nothing stored means no session."""
        assert SessionStore(MemoryStore()).current_session() is None

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[1, 2, 3]",
            json.dumps({"email": "a@b.com"}),
            json.dumps({"id": "1", "email": "a", "display_name": "A", "role": "admin"}),
        ],
    )
    def test_malformed_record_is_ignored(self, raw):
        """A malformed record yields no session rather than an error."""
        store = MemoryStore({"user": raw})
        assert SessionStore(store).current_session() is None

    def test_malformed_record_cannot_be_logged_into(self):
        """Login treats an unusable record as no registration."""
        store = MemoryStore({"user": "{broken"})
        with pytest.raises(NotRegistered):
            SessionStore(store).login("a@b.com", "pw", "candidate")

    def test_custom_key(self):
        """The storage key is configurable."""
        store = MemoryStore()
        SessionStore(store, key="session").register("a@b.com", "pw", "Ann", "candidate")
        assert "session" in store
        assert "user" not in store
