from __future__ import annotations
from typing import Any

from bs4 import BeautifulSoup
import httpx

from jobsync.core.config import settings
from jobsync.crawlers.errors import MalformedResponse, UpstreamRateLimited


def get_json(
    url: str,
    *,
    params: dict | None = None,
    headers: dict | None = None,
    timeout: float = 20.0,
    transport: httpx.BaseTransport | None = None,
) -> Any:
    merged = {"Accept": "application/json", "User-Agent": settings.user_agent}
    merged.update(headers or {})
    with httpx.Client(timeout=timeout, follow_redirects=True, headers=merged, transport=transport) as client:
        resp = client.get(url, params=params)
    if resp.status_code == 429:
        raise UpstreamRateLimited(f"429 from {url}")
    resp.raise_for_status()
    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponse(f"invalid JSON from {url}") from exc


def html_to_text(html: Any) -> str:
    if html is None:
        return ""
    if not isinstance(html, str):
        html = str(html)
    if "<" not in html and "&" not in html:
        return " ".join(html.split())
    text = BeautifulSoup(html, "html.parser").get_text(" ", strip=True)
    return " ".join(text.split())


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
