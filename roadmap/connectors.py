from __future__ import annotations

import logging
from typing import Any, Callable
from urllib.parse import quote_plus

import pandas as pd
import requests

from roadmap import config

logger = logging.getLogger("roadmap.connectors")


def build_job_search_links(role: str, location: str) -> list[dict[str, str]]:
    query = quote_plus(role)
    loc = quote_plus(location)
    return [
        {
            "source": "LinkedIn",
            "title": f"{role} jobs on LinkedIn",
            "url": f"https://www.linkedin.com/jobs/search/?keywords={query}&location={loc}",
        },
        {
            "source": "Indeed",
            "title": f"{role} jobs on Indeed",
            "url": f"https://www.indeed.com/jobs?q={query}&l={loc}",
        },
        {
            "source": "Google Jobs",
            "title": f"{role} jobs on Google",
            "url": f"https://www.google.com/search?q={query}+jobs+{loc}",
        },
    ]


def build_training_links(skills: list[str]) -> list[dict[str, str]]:
    top = skills[:3] if skills else ["system design", "communication", "leadership"]
    query = quote_plus(" ".join(top))
    return [
        {"provider": "Coursera", "title": "Courses for your top gaps", "url": f"https://www.coursera.org/search?query={query}"},
        {"provider": "edX", "title": "Professional certificates", "url": f"https://www.edx.org/search?q={query}"},
        {"provider": "Udemy", "title": "Hands-on project courses", "url": f"https://www.udemy.com/courses/search/?q={query}"},
        {"provider": "freeCodeCamp", "title": "Free practice curriculum", "url": f"https://www.freecodecamp.org/news/search/?query={query}"},
    ]


def _normalize_remotive(item: dict[str, Any]) -> dict[str, str]:
    return {
        "id": f"remotive-{item.get('id', '')}",
        "title": item.get("title") or "Job opening",
        "company": item.get("company_name") or "Unknown",
        "location": item.get("candidate_required_location") or "Remote",
        "salary": item.get("salary") or "",
        "url": item.get("url") or "",
        "type": item.get("job_type") or "",
        "date": item.get("publication_date") or "",
        "source": "remotive",
    }


def _salary_amount(value: Any) -> str:
    try:
        return f"{int(float(value)):,}"
    except (TypeError, ValueError):
        return str(value).strip()


def _normalize_jobicy(item: dict[str, Any]) -> dict[str, str]:
    salary = ""
    if item.get("salaryMin") and item.get("salaryMax"):
        currency = item.get("salaryCurrency") or "USD"
        salary = f"{currency} {_salary_amount(item['salaryMin'])}-{_salary_amount(item['salaryMax'])}"
        if item.get("salaryPeriod"):
            salary += f"/{item['salaryPeriod']}"
    job_types = item.get("jobType") or [""]
    return {
        "id": f"jobicy-{item.get('id', '')}",
        "title": item.get("jobTitle") or "Job opening",
        "company": item.get("companyName") or "Unknown",
        "location": item.get("jobGeo") or "Remote",
        "salary": salary,
        "url": item.get("url") or "",
        "type": job_types[0] if isinstance(job_types, list) else str(job_types),
        "date": item.get("pubDate") or "",
        "source": "jobicy",
    }


def _job_items(response: requests.Response, source: str) -> list[dict[str, Any]]:
    payload = response.json()
    if not isinstance(payload, dict):
        logger.warning("%s returned %s instead of an object", source, type(payload).__name__)
        return []
    jobs = payload.get("jobs") or []
    if not isinstance(jobs, list):
        logger.warning("%s returned a malformed jobs field", source)
        return []
    return [item for item in jobs if isinstance(item, dict)]


def _fetch_remotive(role: str) -> list[dict[str, str]]:
    response = requests.get(
        config.REMOTIVE_URL,
        params={"search": role, "limit": "100"},
        headers={"Accept": "application/json"},
        timeout=config.HTTP_TIMEOUT_S,
    )
    response.raise_for_status()
    return [_normalize_remotive(item) for item in _job_items(response, "remotive")]


def _fetch_jobicy(role: str) -> list[dict[str, str]]:
    response = requests.get(
        config.JOBICY_URL,
        params={"count": "50", "tag": role},
        headers={"Accept": "application/json"},
        timeout=config.HTTP_TIMEOUT_S,
    )
    response.raise_for_status()
    return [_normalize_jobicy(item) for item in _job_items(response, "jobicy")]


JOB_FETCHERS: dict[str, Callable[[str], list[dict[str, str]]]] = {
    "remotive": _fetch_remotive,
    "jobicy": _fetch_jobicy,
}


def deduplicate_jobs(jobs: list[dict[str, str]]) -> list[dict[str, str]]:
    seen: set[str] = set()
    unique = []
    for job in jobs:
        key = f"{job['title'].strip().lower()}::{job['company'].strip().lower()}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique


def _sort_newest_first(jobs: list[dict[str, str]]) -> list[dict[str, str]]:
    if not jobs:
        return jobs
    stamps = pd.to_datetime(pd.Series([job["date"] for job in jobs]), errors="coerce", utc=True, format="mixed")
    stamps = stamps.fillna(pd.Timestamp(0, tz="UTC"))
    order = stamps.sort_values(ascending=False, kind="stable").index
    return [jobs[i] for i in order]


def fetch_live_jobs(role: str, max_results: int = 8, sources: list[str] | None = None) -> list[dict[str, str]]:
    """Open remote postings for ``role`` from the configured job boards.

    Each board is queried on its own; a board that errors is logged and skipped.
    """
    jobs: list[dict[str, str]] = []
    for name in sources or config.JOB_SOURCES:
        fetcher = JOB_FETCHERS.get(name)
        if fetcher is None:
            logger.warning("Unknown job source %r", name)
            continue
        try:
            fetched = fetcher(role)
        except (requests.RequestException, ValueError):
            logger.warning("%s fetch failed for %r", name, role, exc_info=True)
            continue
        jobs.extend(job for job in fetched if job["url"])
        logger.debug("%s returned %d jobs for %r", name, len(fetched), role)

    return deduplicate_jobs(_sort_newest_first(jobs))[:max_results]
