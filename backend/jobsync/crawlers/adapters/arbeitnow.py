from __future__ import annotations

from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json, html_to_text

TECH_KEYWORDS = [
    "software", "developer", "engineer", "programming", "python", "java",
    "javascript", "react", "node", "aws", "cloud", "devops", "data",
    "machine learning", "ai", "frontend", "backend", "full stack",
    "mobile", "ios", "android", "web", "api", "database", "sql",
    "typescript", "golang", "rust", "c++", "kubernetes", "docker",
]


def is_tech_job(item: dict) -> bool:
    tags = item.get("tags") or []
    tag_text = " ".join(str(t) for t in tags) if isinstance(tags, list) else ""
    text = f"{item.get('title') or ''} {item.get('description') or ''} {tag_text}".lower()
    return any(k in text for k in TECH_KEYWORDS)


def _build_postings(payload: dict) -> list[RawPosting]:
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise MalformedResponse("arbeitnow payload has no data list")

    postings: list[RawPosting] = []
    for item in data:
        if not isinstance(item, dict) or not is_tech_job(item):
            continue
        postings.append(
            RawPosting(
                url=as_text(item.get("url")),
                title=as_text(item.get("title")),
                company=as_text(item.get("company_name")),
                location=as_text(item.get("location")),
                description=html_to_text(item.get("description")),
                posted_at=item.get("created_at"),
                remote=item.get("remote") is True,
                raw_payload={"site": "arbeitnow", "slug": as_text(item.get("slug")), "tags": item.get("tags") or []},
            )
        )
    return postings


class ArbeitnowAdapter(SourceAdapter):
    source_name = "Arbeitnow"
    base_url = "https://www.arbeitnow.com/api/job-board-api"
    timeout = 20.0

    def collect(self) -> list[RawPosting]:
        payload = get_json(self.base_url, headers={"Accept-Language": "en-US,en;q=0.9"}, timeout=self.timeout)
        return _build_postings(payload)
