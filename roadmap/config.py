from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("roadmap.config")


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r; using %d", name, raw, default)
        return default


ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")

DATA_DIR = Path(os.getenv("ROADMAP_DATA_DIR", str(ROOT_DIR / "data")))
ROLES_FILE = DATA_DIR / "roles.json"
RESOURCES_FILE = DATA_DIR / "learning_resources.json"
CERTIFICATIONS_FILE = DATA_DIR / "certifications.json"

LOG_LEVEL = os.getenv("ROADMAP_LOG_LEVEL", "INFO").upper()
CURRENCY = os.getenv("ROADMAP_CURRENCY", "USD")

HTTP_TIMEOUT_S = env_int("ROADMAP_HTTP_TIMEOUT_S", 12)
JOB_SOURCES = [
    s.strip().lower()
    for s in os.getenv("ROADMAP_JOB_SOURCES", "remotive,jobicy").split(",")
    if s.strip()
]
REMOTIVE_URL = "https://remotive.com/api/remote-jobs"
JOBICY_URL = "https://jobicy.com/api/v2/remote-jobs"
JOB_CACHE_TTL_S = 60 * 60


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
