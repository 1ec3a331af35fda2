from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobsync.api.deps import require_operator
from jobsync.db.database import get_db
from jobsync.schemas.run import SyncRunOut
from jobsync.services.job_store import list_runs

router = APIRouter(prefix="/runs", tags=["runs"])


@router.get("", response_model=list[SyncRunOut])
def get_runs(
    limit: int = Query(default=100, ge=1, le=500),
    _: str = Depends(require_operator),
    db: Session = Depends(get_db),
):
    return list_runs(db, limit)
