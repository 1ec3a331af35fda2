from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobsync.core.config import settings
from jobsync.crawlers.base import SourceAdapter
from jobsync.crawlers.registry import build_adapters
from jobsync.models.sync_run import SyncRun
from jobsync.services.normalizer import normalize
from jobsync.services.persister import PersistOutcome, upsert_if_new

logger = logging.getLogger(__name__)


@dataclass
class SourceResult:
    source: str
    found: int = 0
    saved: int = 0
    skipped: int = 0
    error: str | None = None

    def as_dict(self) -> dict:
        out = {"source": self.source, "found": self.found, "saved": self.saved, "skipped": self.skipped}
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass
class RunSummary:
    started_at: datetime
    finished_at: datetime | None = None
    results: list[SourceResult] = field(default_factory=list)

    @property
    def total_found(self) -> int:
        return sum(r.found for r in self.results)

    @property
    def total_saved(self) -> int:
        return sum(r.saved for r in self.results)

    @property
    def total_skipped(self) -> int:
        return sum(r.skipped for r in self.results)

    @property
    def failed_sources(self) -> list[str]:
        return [r.source for r in self.results if r.error is not None]

    def as_dict(self) -> dict:
        return {
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "results": [r.as_dict() for r in self.results],
            "total_found": self.total_found,
            "total_saved": self.total_saved,
            "total_skipped": self.total_skipped,
            "failed_sources": self.failed_sources,
        }


def _record_run(db: Session, result: SourceResult, started_at: datetime, status: str) -> None:
    run = SyncRun(
        source=result.source,
        started_at=started_at,
        finished_at=datetime.utcnow(),
        found_count=result.found,
        saved_count=result.saved,
        skipped_count=result.skipped,
        status=status,
        error_summary=result.error or "",
    )
    db.add(run)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[%s] could not record sync run: %s", result.source, exc)


def run_source(db: Session, adapter: SourceAdapter) -> SourceResult:
    """Fetch, normalize and persist one source. Never raises."""
    source = adapter.source_name
    started_at = datetime.utcnow()
    result = SourceResult(source=source)

    try:
        postings = adapter.fetch()
        result.found = len(postings)
        for raw in postings:
            if not (raw.url or "").strip():
                result.skipped += 1
                continue
            try:
                outcome = upsert_if_new(db, normalize(raw, source))
            except SQLAlchemyError as exc:
                db.rollback()
                logger.warning("[%s] could not save %s: %s", source, raw.url, exc)
                result.skipped += 1
                continue
            if outcome is PersistOutcome.INSERTED:
                result.saved += 1
            else:
                result.skipped += 1
    except Exception as exc:  # noqa: BLE001
        db.rollback()
        logger.exception("[%s] sync failed", source)
        result = SourceResult(source=source, error=str(exc)[:2000] or exc.__class__.__name__)

    _record_run(db, result, started_at, "failed" if result.error else "success")
    logger.info("[%s] saved %d, skipped %d (duplicates)", source, result.saved, result.skipped)
    return result


def log_summary(summary: RunSummary) -> None:
    logger.info("sync summary (%d sources)", len(summary.results))
    for r in summary.results:
        status = f"error: {r.error}" if r.error else "ok"
        logger.info("  %-10s found=%-4d saved=%-4d skipped=%-4d %s", r.source, r.found, r.saved, r.skipped, status)
    logger.info(
        "  %-10s found=%-4d saved=%-4d skipped=%-4d",
        "TOTAL",
        summary.total_found,
        summary.total_saved,
        summary.total_skipped,
    )
    if summary.total_found == 0:
        logger.info("no postings returned by any source")
    elif summary.total_saved == 0:
        logger.info("all postings already stored, nothing added")
    else:
        logger.info("added %d new postings", summary.total_saved)


def run_sync(
    db: Session,
    adapters: list[SourceAdapter] | None = None,
    *,
    source_delay: float | None = None,
) -> RunSummary:
    """Run one ingestion pass over ``adapters`` strictly in order."""
    if adapters is None:
        adapters = build_adapters()
    delay = settings.source_delay_seconds if source_delay is None else source_delay

    summary = RunSummary(started_at=datetime.utcnow())
    called_upstream = False

    for adapter in adapters:
        if not adapter.is_configured():
            logger.info("[%s] skipping, no API credentials configured", adapter.source_name)
            result = SourceResult(source=adapter.source_name)
            _record_run(db, result, datetime.utcnow(), "skipped")
            summary.results.append(result)
            continue

        # Space out upstream calls; unconfigured sources cost nothing.
        if called_upstream and delay > 0:
            time.sleep(delay)
        logger.info("[%s] fetching from API", adapter.source_name)
        summary.results.append(run_source(db, adapter))
        called_upstream = True

    summary.finished_at = datetime.utcnow()
    log_summary(summary)
    return summary
