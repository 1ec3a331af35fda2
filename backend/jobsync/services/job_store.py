from __future__ import annotations
from datetime import datetime, timedelta

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from jobsync.models.job import Job
from jobsync.models.sync_run import SyncRun
from jobsync.services.normalizer import JobPosting


def find_by_url(db: Session, url: str) -> Job | None:
    return db.query(Job).filter(Job.url == url).first()


def insert_job(db: Session, posting: JobPosting) -> Job:
    """Insert and commit; raises IntegrityError if the URL already exists."""
    record = Job(
        url=posting.url,
        title=posting.title,
        company=posting.company,
        location=posting.location,
        description=posting.description,
        salary=posting.salary,
        source=posting.source,
        verified=posting.verified,
        type=posting.type.value,
        category=posting.category.value,
        is_remote=posting.is_remote,
        is_india_eligible=posting.is_india_eligible,
        posted_at=posting.posted_at,
        created_at=datetime.utcnow(),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def latest_created_at(db: Session) -> datetime | None:
    return db.query(func.max(Job.created_at)).scalar()


def sync_status(db: Session, now: datetime | None = None) -> dict:
    now = now or datetime.utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = today + timedelta(days=1)
    added_today = (Job.created_at >= today, Job.created_at < tomorrow)

    last_job = db.query(Job).order_by(desc(Job.created_at)).first()
    breakdown = (
        db.query(Job.source, func.count(Job.id))
        .filter(*added_today)
        .group_by(Job.source)
        .order_by(Job.source)
        .all()
    )
    return {
        "jobs_added_today": db.query(func.count(Job.id)).filter(*added_today).scalar() or 0,
        "total_jobs": db.query(func.count(Job.id)).scalar() or 0,
        "last_sync_at": last_job.created_at if last_job else None,
        "last_source": last_job.source if last_job else None,
        "source_breakdown": [{"source": source, "count": count} for source, count in breakdown],
    }


def list_runs(db: Session, limit: int = 100) -> list[SyncRun]:
    return db.query(SyncRun).order_by(desc(SyncRun.started_at), desc(SyncRun.id)).limit(limit).all()
