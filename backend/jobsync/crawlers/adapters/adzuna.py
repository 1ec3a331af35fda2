from __future__ import annotations
from itertools import product

from jobsync.core.config import settings
from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import MalformedResponse
from jobsync.crawlers.http_helpers import as_text, get_json

BASE_URL = "https://api.adzuna.com/v1/api/jobs"
SEARCH_QUERIES = ["software", "developer", "engineer", "data scientist"]
# India first; it is the primary market.
COUNTRIES = ["in", "gb", "us"]


def _salary(item: dict) -> str | None:
    low = item.get("salary_min")
    high = item.get("salary_max")
    if low and high:
        return f"{low} - {high}"
    return None


def _build_postings(payload: dict, country: str) -> list[RawPosting]:
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise MalformedResponse("adzuna payload has no results list")

    postings: list[RawPosting] = []
    for item in results:
        if not isinstance(item, dict):
            continue
        company = item.get("company") or {}
        location = item.get("location") or {}
        postings.append(
            RawPosting(
                url=as_text(item.get("redirect_url")),
                title=as_text(item.get("title")),
                company=as_text(company.get("display_name")) if isinstance(company, dict) else "",
                location=(as_text(location.get("display_name")) if isinstance(location, dict) else "")
                or country.upper(),
                description=as_text(item.get("description")),
                salary=_salary(item),
                posted_at=item.get("created"),
                raw_payload={"site": "adzuna", "country": country, "id": as_text(item.get("id"))},
            )
        )
    return postings


class AdzunaAdapter(SourceAdapter):
    source_name = "Adzuna"
    timeout = 30.0

    def __init__(
        self,
        app_id: str | None = None,
        app_key: str | None = None,
        *,
        queries_per_country: int = 2,
        results_per_page: int = 20,
        query_delay: float | None = None,
    ):
        self.app_id = settings.adzuna_app_id if app_id is None else app_id
        self.app_key = settings.adzuna_app_key if app_key is None else app_key
        # Free tier is 250 requests a month.
        self.queries_per_country = queries_per_country
        self.results_per_page = results_per_page
        self.query_delay = settings.query_delay_seconds if query_delay is None else query_delay

    def is_configured(self) -> bool:
        return bool(self.app_id and self.app_key)

    def query_plan(self) -> list[tuple[str, str]]:
        return list(product(COUNTRIES, SEARCH_QUERIES[: self.queries_per_country]))

    def search(self, combo: tuple[str, str]) -> list[RawPosting]:
        country, query = combo
        payload = get_json(
            f"{BASE_URL}/{country}/search/1",
            params={
                "app_id": self.app_id,
                "app_key": self.app_key,
                "results_per_page": self.results_per_page,
                "what": query,
                "content_type": "application/json",
            },
            timeout=self.timeout,
        )
        return _build_postings(payload, country)

    def collect(self) -> list[RawPosting]:
        return self.run_queries(self.query_plan(), self.search, self.query_delay)
