from __future__ import annotations

from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json, html_to_text


def _build_postings(payload: dict, limit: int) -> list[RawPosting]:
    jobs = payload.get("jobs") if isinstance(payload, dict) else None
    if not isinstance(jobs, list):
        raise MalformedResponse("remotive payload has no jobs list")

    postings: list[RawPosting] = []
    for item in jobs[:limit]:
        if not isinstance(item, dict):
            continue
        postings.append(
            RawPosting(
                url=as_text(item.get("url")),
                title=as_text(item.get("title")),
                company=as_text(item.get("company_name")),
                location=as_text(item.get("candidate_required_location")) or "Remote",
                description=html_to_text(item.get("description")),
                salary=as_text(item.get("salary")) or None,
                posted_at=item.get("publication_date"),
                remote=True,
                raw_payload={"site": "remotive", "id": as_text(item.get("id")), "job_type": item.get("job_type")},
            )
        )
    return postings


class RemotiveAdapter(SourceAdapter):
    source_name = "Remotive"
    base_url = "https://remotive.com/api/remote-jobs"
    timeout = 15.0

    def __init__(self, category: str = "software-dev", limit: int = 30):
        self.category = category
        self.limit = limit

    def collect(self) -> list[RawPosting]:
        payload = get_json(
            self.base_url,
            params={"category": self.category, "limit": self.limit},
            timeout=self.timeout,
        )
        return _build_postings(payload, self.limit)
