from __future__ import annotations

import requests

from roadmap import connectors
from roadmap.connectors import (
    build_job_search_links,
    build_training_links,
    deduplicate_jobs,
    fetch_live_jobs,
)


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        return None

    def json(self):
        return self._payload


REMOTIVE_JOBS = {
    "jobs": [
        {
            "id": 1,
            "title": "Senior Software Engineer",
            "company_name": "Acme",
            "candidate_required_location": "Worldwide",
            "url": "https://remotive.com/jobs/1",
            "publication_date": "2025-03-01T10:00:00",
        },
        {
            "id": 2,
            "title": "Backend Engineer",
            "company_name": "Globex",
            "url": "https://remotive.com/jobs/2",
            "publication_date": "2025-03-05T08:30:00",
        },
        {"id": 3, "title": "No Link", "company_name": "Initech", "url": ""},
    ]
}

JOBICY_JOBS = {
    "jobs": [
        {
            "id": 9,
            "jobTitle": "senior software engineer",
            "companyName": "ACME",
            "jobGeo": "USA",
            "url": "https://jobicy.com/jobs/9",
            "pubDate": "2025-02-01 12:00:00",
            "salaryMin": 120000,
            "salaryMax": 150000,
            "salaryCurrency": "USD",
            "salaryPeriod": "year",
            "jobType": ["full-time"],
        }
    ]
}


def _fake_get(url, params=None, headers=None, timeout=None):
    if url == connectors.config.REMOTIVE_URL:
        return FakeResponse(REMOTIVE_JOBS)
    if url == connectors.config.JOBICY_URL:
        return FakeResponse(JOBICY_JOBS)
    raise AssertionError(f"unexpected url {url}")


def test_job_search_links_include_platforms():
    links = build_job_search_links("Data Scientist", "New York")
    sources = {item["source"] for item in links}
    assert {"LinkedIn", "Indeed", "Google Jobs"} <= sources
    assert "Data+Scientist" in links[0]["url"]


def test_training_links_cover_top_gaps():
    links = build_training_links(["System Design", "Mentoring"])
    providers = {item["provider"] for item in links}
    assert "Coursera" in providers
    assert "freeCodeCamp" in providers
    assert "System+Design+Mentoring" in links[0]["url"]


def test_live_jobs_merge_dedupe_and_sort(monkeypatch):
    monkeypatch.setattr(connectors.requests, "get", _fake_get)
    jobs = fetch_live_jobs("software engineer", sources=["remotive", "jobicy"])
    assert [j["title"] for j in jobs] == ["Backend Engineer", "Senior Software Engineer"]
    assert jobs[1]["source"] == "remotive"
    assert all(j["url"] for j in jobs)


def test_one_failing_source_does_not_block_the_other(monkeypatch):
    def flaky_get(url, params=None, headers=None, timeout=None):
        if url == connectors.config.REMOTIVE_URL:
            raise requests.ConnectionError("down")
        return _fake_get(url, params=params, headers=headers, timeout=timeout)

    monkeypatch.setattr(connectors.requests, "get", flaky_get)
    jobs = fetch_live_jobs("software engineer", sources=["remotive", "jobicy"])
    assert len(jobs) == 1
    assert jobs[0]["source"] == "jobicy"
    assert jobs[0]["salary"] == "USD 120,000-150,000/year"


def test_unknown_source_is_skipped(monkeypatch):
    monkeypatch.setattr(connectors.requests, "get", _fake_get)
    assert fetch_live_jobs("engineer", sources=["nowhere"]) == []


def test_max_results_limits_output(monkeypatch):
    monkeypatch.setattr(connectors.requests, "get", _fake_get)
    assert len(fetch_live_jobs("engineer", max_results=1, sources=["remotive"])) == 1


def test_deduplicate_is_case_insensitive():
    jobs = [
        {"title": "Engineer ", "company": "Acme"},
        {"title": "engineer", "company": "ACME"},
        {"title": "Engineer", "company": "Globex"},
    ]
    assert len(deduplicate_jobs(jobs)) == 2


def test_string_salaries_keep_the_listing(monkeypatch):
    listing = dict(JOBICY_JOBS["jobs"][0], salaryMin="95000", salaryMax="competitive")

    def get(url, params=None, headers=None, timeout=None):
        return FakeResponse({"jobs": [listing]})

    monkeypatch.setattr(connectors.requests, "get", get)
    jobs = fetch_live_jobs("software engineer", sources=["jobicy"])
    assert len(jobs) == 1
    assert jobs[0]["salary"] == "USD 95,000-competitive/year"


def test_non_object_payload_is_an_empty_source(monkeypatch):
    def get(url, params=None, headers=None, timeout=None):
        if url == connectors.config.REMOTIVE_URL:
            return FakeResponse([{"title": "not wrapped"}])
        return FakeResponse({"jobs": ["junk", JOBICY_JOBS["jobs"][0]]})

    monkeypatch.setattr(connectors.requests, "get", get)
    jobs = fetch_live_jobs("software engineer", sources=["remotive", "jobicy"])
    assert [j["source"] for j in jobs] == ["jobicy"]
