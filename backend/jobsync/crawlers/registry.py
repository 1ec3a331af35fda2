from __future__ import annotations
from jobsync.crawlers.adapters.adzuna import AdzunaAdapter
from jobsync.crawlers.adapters.arbeitnow import ArbeitnowAdapter
from jobsync.crawlers.adapters.indianapi import IndianApiAdapter
from jobsync.crawlers.adapters.jobicy import JobicyAdapter
from jobsync.crawlers.adapters.remotive import RemotiveAdapter
from jobsync.crawlers.adapters.themuse import TheMuseAdapter
from jobsync.crawlers.base import SourceAdapter

ADAPTERS = {
    "adzuna": AdzunaAdapter,
    "arbeitnow": ArbeitnowAdapter,
    "remotive": RemotiveAdapter,
    "themuse": TheMuseAdapter,
    "jobicy": JobicyAdapter,
    "indianapi": IndianApiAdapter,
}

# Processed in this order on every scheduled run.
DEFAULT_ROTATION = ["adzuna", "arbeitnow", "remotive", "themuse", "jobicy"]

# Strict upstream quota; only run on demand.
MANUAL_SOURCES = ["indianapi"]


def build_adapters(names: list[str] | None = None) -> list[SourceAdapter]:
    selected = DEFAULT_ROTATION if names is None else names
    unknown = [n for n in selected if n not in ADAPTERS]
    if unknown:
        raise ValueError(f"unknown source(s): {', '.join(unknown)}")
    return [ADAPTERS[name]() for name in selected]
