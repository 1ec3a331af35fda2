from __future__ import annotations
from jobsync.models.job import Job
from jobsync.models.sync_run import SyncRun

__all__ = ["Job", "SyncRun"]
