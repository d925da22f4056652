"""Shared fixtures for job board tests."""
import os
from datetime import datetime, timezone

import pytest

os.environ.setdefault("JOBBOARD_NO_FILE_LOG", "1")

from jobboard.catalog import ListingCatalog
from jobboard.clock import FixedClock
from jobboard.models import EmploymentKind, ListingFields
from jobboard.notifications import NotificationCenter
from jobboard.profiles import ProfileBook
from jobboard.session import SessionStore
from jobboard.storage import MemoryStore
from jobboard.tracker import ApplicationTracker


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sessions(store):
    return SessionStore(store)


@pytest.fixture
def catalog(clock):
    return ListingCatalog(clock)


@pytest.fixture
def notifications(clock):
    return NotificationCenter(clock)


@pytest.fixture
def profiles(clock):
    return ProfileBook(clock)


@pytest.fixture
def tracker(catalog, notifications, clock):
    return ApplicationTracker(catalog, notifications, clock)


@pytest.fixture
def recruiter(sessions):
    return sessions.register("hr@techcorp.com", "secret", "Rita Recruiter", "recruiter", "TechCorp")


@pytest.fixture
def other_recruiter():
    # A second recruiter that never went through this store
    return SessionStore(MemoryStore()).register(
        "hr@design.studio", "pw", "Dana", "recruiter", "Design Studio"
    )


@pytest.fixture
def candidate():
    return SessionStore(MemoryStore()).register("cand@mail.com", "pw", "Casey Candidate", "candidate")


def make_fields(**overrides) -> ListingFields:
    values = dict(
        title="Senior Frontend Developer",
        location="San Francisco, CA",
        kind=EmploymentKind.FULL_TIME,
        salary_min=120000,
        salary_max=180000,
        description="Build amazing user experiences.",
        requirements=["React", "TypeScript"],
        benefits=["Health Insurance"],
    )
    values.update(overrides)
    return ListingFields(**values)


@pytest.fixture
def fields():
    return make_fields()
