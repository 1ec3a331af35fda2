from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel


class SourceResultOut(BaseModel):
    source: str
    found: int
    saved: int
    skipped: int
    error: str | None = None


class SyncTriggerResponse(BaseModel):
    success: bool
    message: str
    total_found: int = 0
    total_saved: int = 0
    total_skipped: int = 0
    results: list[SourceResultOut] = []


class SourceCount(BaseModel):
    source: str
    count: int


class SyncStatusOut(BaseModel):
    jobs_added_today: int
    total_jobs: int
    last_sync_at: datetime | None
    last_source: str | None
    source_breakdown: list[SourceCount]
    running: bool
    scheduler_started: bool
