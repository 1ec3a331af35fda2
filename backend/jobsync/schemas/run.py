from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SyncRunOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    source: str
    started_at: datetime
    finished_at: datetime | None
    found_count: int
    saved_count: int
    skipped_count: int
    status: str
    error_summary: str
