"""
Tests for configuration loading and context wiring.
"""
from pathlib import Path

from jobboard import config
from jobboard.context import build_context
from jobboard.models import EmploymentKind, FilterCriteria
from jobboard.storage import MemoryStore
from tests.conftest import make_fields


def test_shipped_seed_file_loads():
    jobs = config.load_seed_jobs(config.SEED_PATH)
    assert [j["organization"] for j in jobs] == ["TechCorp Inc.", "Design Studio", "Analytics Pro"]


def test_missing_seed_file_is_empty(tmp_path):
    assert config.load_seed_jobs(tmp_path / "nope.yaml") == []


def test_seed_file_as_bare_list(tmp_path):
    path = tmp_path / "jobs.yaml"
    path.write_text("- title: A\n- title: B\n", encoding="utf-8")
    assert [j["title"] for j in config.load_seed_jobs(path)] == ["A", "B"]


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("JOBBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JOBBOARD_SESSION_KEY", "session")
    assert config.storage_path() == tmp_path / config.STORAGE_FILE
    assert config.session_key() == "session"
    monkeypatch.delenv("JOBBOARD_DATA_DIR")
    monkeypatch.setenv("JOBBOARD_SESSION_KEY", "")
    assert config.data_dir() == config.DATA_DIR
    assert config.session_key() == "user"


class TestBuildContext:
    """Tests for build_context."""

    def test_seeded_catalog(self, clock):
        ctx = build_context(MemoryStore(), clock, config.SEED_PATH)
        titles = [j.title for j in ctx.catalog.list()]
        assert titles == ["Senior Frontend Developer", "UX/UI Designer", "Data Scientist"]
        tech = ctx.catalog.filter(FilterCriteria(query="tech", kind="all"))
        assert [j.organization for j in tech] == ["TechCorp Inc."]
        assert ctx.catalog.get("3").kind is EmploymentKind.CONTRACT

    def test_unseeded(self, clock):
        ctx = build_context(MemoryStore(), clock, seed=False)
        assert ctx.catalog.list() == []

    def test_components_share_state(self, clock, tmp_path: Path):
        ctx = build_context(MemoryStore(), clock, tmp_path / "missing.yaml")
        recruiter = ctx.sessions.register("r@b.com", "pw", "Rex", "recruiter", "Acme")
        job = ctx.catalog.create(recruiter, make_fields())
        candidate = ctx.sessions.register("c@b.com", "pw", "Cy", "candidate")
        ctx.tracker.apply(candidate, job.id)
        assert ctx.notifications.unread_count(recruiter.id) == 1
        assert ctx.sessions.current_session() == candidate

    def test_profiles_start_empty(self, clock):
        ctx = build_context(MemoryStore(), clock, seed=False)
        user = ctx.sessions.register("c@b.com", "pw", "Cy", "candidate")
        assert len(ctx.profiles) == 0
        assert ctx.profiles.get(user).is_blank
