"""Wire the job board together once per process (or browser session)."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jobboard.catalog import ListingCatalog
from jobboard.clock import SystemClock
from jobboard.config import load_seed_jobs, session_key
from jobboard.log import get_logger
from jobboard.notifications import NotificationCenter
from jobboard.profiles import ProfileBook
from jobboard.session import SessionStore
from jobboard.storage import KeyValueStore, MemoryStore
from jobboard.tracker import ApplicationTracker

log = get_logger(__name__)


@dataclass
class AppContext:
    clock: object
    sessions: SessionStore
    catalog: ListingCatalog
    notifications: NotificationCenter
    tracker: ApplicationTracker
    profiles: ProfileBook


def build_context(
    store: KeyValueStore | None = None,
    clock=None,
    seed_path: Path | None = None,
    *,
    seed: bool = True,
) -> AppContext:
    clock = clock or SystemClock()
    sessions = SessionStore(store if store is not None else MemoryStore(), key=session_key())
    catalog = ListingCatalog(clock)
    if seed:
        catalog.seed(load_seed_jobs(seed_path))
    notifications = NotificationCenter(clock)
    tracker = ApplicationTracker(catalog, notifications, clock)
    profiles = ProfileBook(clock)
    log.debug("Context ready: %d listing(s)", len(catalog))
    return AppContext(
        clock=clock,
        sessions=sessions,
        catalog=catalog,
        notifications=notifications,
        tracker=tracker,
        profiles=profiles,
    )
