from __future__ import annotations
from enum import Enum
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobsync.services import job_store
from jobsync.services.normalizer import JobPosting

logger = logging.getLogger(__name__)


class PersistOutcome(str, Enum):
    INSERTED = "inserted"
    SKIPPED = "skipped"


def upsert_if_new(db: Session, posting: JobPosting) -> PersistOutcome:
    """Store ``posting`` unless a row with its URL already exists.

    The lookup and insert are not locked. A concurrent writer that wins the
    race trips the unique constraint on ``jobs.url``, which is reported as a
    skip just like a hit on the lookup.
    """
    if job_store.find_by_url(db, posting.url) is not None:
        return PersistOutcome.SKIPPED

    try:
        job_store.insert_job(db, posting)
    except IntegrityError:
        db.rollback()
        logger.debug("lost insert race for %s", posting.url)
        return PersistOutcome.SKIPPED
    return PersistOutcome.INSERTED
