from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from jobsync.crawlers.base import RawPosting
from jobsync.services.classifier import (
    JobCategory,
    JobType,
    classify_category,
    classify_type,
    detect_india_eligible,
    detect_remote,
)
from jobsync.utils.dates import parse_posted_at

DESCRIPTION_MAX_CHARS = 2000
# Column widths of jobs.title, jobs.company, jobs.location and jobs.salary.
TITLE_MAX_CHARS = 512
COMPANY_MAX_CHARS = 256
LOCATION_MAX_CHARS = 512
SALARY_MAX_CHARS = 128

DEFAULT_TITLE = "Untitled Position"
DEFAULT_COMPANY = "Unknown Company"
DEFAULT_LOCATION = "Not Specified"


@dataclass
class JobPosting:
    url: str
    title: str
    company: str
    location: str
    description: str | None
    salary: str | None
    source: str
    type: JobType
    category: JobCategory
    is_remote: bool
    is_india_eligible: bool
    posted_at: datetime
    verified: bool = True


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize(raw: RawPosting, source: str, now: datetime | None = None) -> JobPosting:
    title = _clean(raw.title)[:TITLE_MAX_CHARS]
    description = _clean(raw.description)[:DESCRIPTION_MAX_CHARS]
    location = _clean(raw.location)[:LOCATION_MAX_CHARS]

    # Classification sees the source text, not the display defaults.
    is_remote = detect_remote(location, description, raw.remote)

    return JobPosting(
        url=_clean(raw.url),
        title=title or DEFAULT_TITLE,
        company=_clean(raw.company)[:COMPANY_MAX_CHARS] or DEFAULT_COMPANY,
        location=location or DEFAULT_LOCATION,
        description=description or None,
        salary=_clean(raw.salary)[:SALARY_MAX_CHARS] or None,
        source=source,
        type=classify_type(title, description),
        category=classify_category(title, description),
        is_remote=is_remote,
        is_india_eligible=detect_india_eligible(location, description, is_remote),
        posted_at=parse_posted_at(raw.posted_at) or now or datetime.utcnow(),
    )
