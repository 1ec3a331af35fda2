from __future__ import annotations
from jobsync.db.database import Base, engine
from jobsync.models import job, sync_run  # noqa: F401


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
