"""Regional India jobs source.

The upstream quota is about 10 requests a month, so this adapter is not part
of the default rotation. Run it by hand with ``run_sync.py --source indianapi``
or from a weekly cron entry.
"""
from __future__ import annotations

from jobsync.core.config import settings
from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json, html_to_text


def _first(item: dict, *keys: str):
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return None


def _build_postings(payload) -> list[RawPosting]:
    jobs = payload.get("jobs") if isinstance(payload, dict) else payload
    if not isinstance(jobs, list):
        raise MalformedResponse("indianapi payload is neither a list nor has a jobs list")

    postings: list[RawPosting] = []
    for item in jobs:
        if not isinstance(item, dict):
            continue
        postings.append(
            RawPosting(
                url=as_text(_first(item, "url", "apply_url", "job_url")),
                title=as_text(_first(item, "title", "job_title")),
                company=as_text(_first(item, "company", "company_name")),
                location=as_text(_first(item, "location", "job_location")) or "India",
                description=html_to_text(_first(item, "description", "job_description")),
                salary=as_text(_first(item, "salary", "salary_range")) or None,
                posted_at=_first(item, "posted_at", "date_posted"),
                raw_payload={"site": "indianapi", "job_type": _first(item, "job_type", "type")},
            )
        )
    return postings


class IndianApiAdapter(SourceAdapter):
    source_name = "IndianAPI"
    base_url = "https://jobs.indianapi.in/jobs"
    timeout = 30.0

    def __init__(self, api_key: str | None = None, limit: int = 100):
        self.api_key = settings.indian_api_key if api_key is None else api_key
        # One request per run, so take as many postings as the API allows.
        self.limit = limit

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def collect(self) -> list[RawPosting]:
        payload = get_json(
            self.base_url,
            params={"limit": self.limit},
            headers={"X-Api-Key": self.api_key},
            timeout=self.timeout,
        )
        return _build_postings(payload)
