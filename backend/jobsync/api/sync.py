from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from jobsync.api.deps import get_scheduler, require_operator
from jobsync.db.database import get_db
from jobsync.schemas.sync import SourceResultOut, SyncStatusOut, SyncTriggerResponse
from jobsync.services.job_store import sync_status
from jobsync.services.scheduler import SyncScheduler

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/trigger", response_model=SyncTriggerResponse)
async def trigger(_: str = Depends(require_operator), scheduler: SyncScheduler = Depends(get_scheduler)):
    summary = await run_in_threadpool(scheduler.trigger_run)
    if summary is None:
        return SyncTriggerResponse(success=False, message="sync already in progress")
    return SyncTriggerResponse(
        success=True,
        message="sync completed",
        total_found=summary.total_found,
        total_saved=summary.total_saved,
        total_skipped=summary.total_skipped,
        results=[SourceResultOut(**r.as_dict()) for r in summary.results],
    )


@router.get("/status", response_model=SyncStatusOut)
def status(db: Session = Depends(get_db), scheduler: SyncScheduler = Depends(get_scheduler)):
    return SyncStatusOut(
        **sync_status(db),
        running=scheduler.is_running,
        scheduler_started=scheduler.is_started,
    )
