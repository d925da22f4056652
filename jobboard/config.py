"""Load environment and seed configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobboard.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SEED_PATH: Path = CONFIG_DIR / "seed_jobs.yaml"
DATA_DIR: Path = ROOT_DIR / "data"
STORAGE_FILE: str = "local_storage.json"
DEFAULT_SESSION_KEY: str = "user"


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def data_dir() -> Path:
    override = get_env("JOBBOARD_DATA_DIR")
    return Path(override).expanduser() if override else DATA_DIR


def storage_path() -> Path:
    """File that stands in for the browser's local storage."""
    return data_dir() / STORAGE_FILE


def session_key() -> str:
    return get_env("JOBBOARD_SESSION_KEY", DEFAULT_SESSION_KEY) or DEFAULT_SESSION_KEY


def seed_path() -> Path:
    override = get_env("JOBBOARD_SEED_PATH")
    return Path(override).expanduser() if override else SEED_PATH


def ensure_dirs() -> None:
    data_dir().mkdir(parents=True, exist_ok=True)


def load_seed_jobs(path: Path | None = None) -> list[dict[str, Any]]:
    """Seed listings from YAML; an absent file means an empty catalog."""
    path = path or seed_path()
    if not path.exists():
        log.warning("Seed file not found → %s (starting with no listings)", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Accept either a bare list or a top-level "jobs" key
    if isinstance(data, list):
        jobs = data
    else:
        jobs = data.get("jobs", [])
    log.debug("Loaded %d seed listing(s) from %s", len(jobs), path.name)
    return list(jobs)
