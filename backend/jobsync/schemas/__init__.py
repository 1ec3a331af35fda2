from __future__ import annotations
from jobsync.schemas.auth import LoginRequest, TokenResponse
from jobsync.schemas.run import SyncRunOut
from jobsync.schemas.sync import SourceCount, SourceResultOut, SyncStatusOut, SyncTriggerResponse

__all__ = [
    "LoginRequest",
    "TokenResponse",
    "SyncRunOut",
    "SourceCount",
    "SourceResultOut",
    "SyncStatusOut",
    "SyncTriggerResponse",
]
