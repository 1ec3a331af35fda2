from __future__ import annotations

from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json, html_to_text


def _landing_url(item: dict) -> str:
    refs = item.get("refs") or {}
    if isinstance(refs, dict) and refs.get("landing_page"):
        return as_text(refs["landing_page"])
    company = item.get("company") or {}
    short_name = as_text(company.get("short_name")) if isinstance(company, dict) else ""
    return f"https://www.themuse.com/jobs/{short_name or 'company'}/{item.get('short_name') or item.get('id')}"


def _build_postings(payload: dict) -> list[RawPosting]:
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise MalformedResponse("themuse payload has no results list")

    postings: list[RawPosting] = []
    for item in results:
        if not isinstance(item, dict):
            continue
        names = [as_text(loc.get("name")) for loc in item.get("locations") or [] if isinstance(loc, dict)]
        location = ", ".join(n for n in names if n)
        company = item.get("company") or {}
        lowered = location.lower()
        postings.append(
            RawPosting(
                url=_landing_url(item),
                title=as_text(item.get("name")),
                company=as_text(company.get("name")) if isinstance(company, dict) else "",
                location=location,
                description=html_to_text(item.get("contents")),
                posted_at=item.get("publication_date"),
                remote="remote" in lowered or "flexible" in lowered,
                raw_payload={"site": "themuse", "id": as_text(item.get("id"))},
            )
        )
    return postings


class TheMuseAdapter(SourceAdapter):
    source_name = "TheMuse"
    base_url = "https://www.themuse.com/api/public/jobs"
    timeout = 20.0

    def __init__(self, category: str = "Software Engineering"):
        self.category = category

    def collect(self) -> list[RawPosting]:
        payload = get_json(
            self.base_url,
            params={"category": self.category, "page": 0, "descending": "true"},
            timeout=self.timeout,
        )
        return _build_postings(payload)
