from __future__ import annotations

from jobsync.core.config import settings
from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json, html_to_text

INDUSTRIES = ["dev", "devops", "data", "design"]


def _salary(item: dict) -> str | None:
    low = item.get("annualSalaryMin")
    high = item.get("annualSalaryMax")
    if low and high:
        return f"${low} - ${high}"
    return None


def _build_postings(payload: dict) -> list[RawPosting]:
    jobs = payload.get("jobs") if isinstance(payload, dict) else None
    if not isinstance(jobs, list):
        raise MalformedResponse("jobicy payload has no jobs list")

    postings: list[RawPosting] = []
    for item in jobs:
        if not isinstance(item, dict):
            continue
        postings.append(
            RawPosting(
                url=as_text(item.get("url")),
                title=as_text(item.get("jobTitle")),
                company=as_text(item.get("companyName")),
                location=as_text(item.get("jobGeo")) or "Remote",
                description=html_to_text(item.get("jobDescription") or item.get("jobExcerpt")),
                salary=_salary(item),
                posted_at=item.get("pubDate"),
                remote=True,
                raw_payload={"site": "jobicy", "id": as_text(item.get("id")), "job_type": item.get("jobType")},
            )
        )
    return postings


class JobicyAdapter(SourceAdapter):
    source_name = "Jobicy"
    base_url = "https://jobicy.com/api/v2/remote-jobs"
    timeout = 15.0

    def __init__(self, industries: list[str] | None = None, count: int = 50, query_delay: float | None = None):
        self.industries = list(industries or INDUSTRIES)
        self.count = count
        self.query_delay = settings.query_delay_seconds if query_delay is None else query_delay

    def search(self, industry: str) -> list[RawPosting]:
        payload = get_json(
            self.base_url,
            params={"count": self.count, "geo": "worldwide", "industry": industry},
            timeout=self.timeout,
        )
        return _build_postings(payload)

    def collect(self) -> list[RawPosting]:
        postings = self.run_queries(self.industries, self.search, self.query_delay)
        # Industries overlap. Collapse repeats within this fetch (last copy kept);
        # across runs and sources the store keeps the first arrival.
        unique = {p.url: p for p in postings}
        return list(unique.values())
