from __future__ import annotations
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
import logging
import time
from typing import Any, TypeVar

import httpx

from jobsync.crawlers.errors import MalformedResponse, UpstreamRateLimited

logger = logging.getLogger(__name__)

Q = TypeVar("Q")

# Raised by item parsing when a 2xx body has an unexpected shape.
PARSE_ERRORS = (TypeError, ValueError, AttributeError, KeyError)


@dataclass
class RawPosting:
    url: str
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    salary: str | None = None
    # Whatever the source reported: datetime, ISO string or epoch number.
    posted_at: Any = None
    remote: bool | None = None
    raw_payload: dict = field(default_factory=dict)


class SourceAdapter:
    """One external job API.

    Subclasses implement ``collect``; ``fetch`` wraps it so that upstream
    failures are logged and turned into an empty result instead of raised.
    """

    source_name: str
    timeout: float = 20.0

    def is_configured(self) -> bool:
        return True

    def fetch(self) -> list[RawPosting]:
        if not self.is_configured():
            logger.info("[%s] skipping, no API credentials configured", self.source_name)
            return []
        try:
            postings = self.collect()
        except UpstreamRateLimited:
            logger.warning("[%s] rate limited, will retry on next scheduled run", self.source_name)
            return []
        except MalformedResponse as exc:
            logger.warning("[%s] could not parse response: %s", self.source_name, exc)
            return []
        except httpx.TimeoutException:
            logger.warning("[%s] timed out after %ss", self.source_name, self.timeout)
            return []
        except httpx.HTTPStatusError as exc:
            logger.warning("[%s] upstream returned HTTP %s", self.source_name, exc.response.status_code)
            return []
        except httpx.HTTPError as exc:
            logger.warning("[%s] request failed: %s", self.source_name, exc)
            return []
        except PARSE_ERRORS as exc:
            logger.warning("[%s] could not parse postings: %r", self.source_name, exc)
            return []
        logger.info("[%s] fetched %d postings", self.source_name, len(postings))
        return postings

    def collect(self) -> list[RawPosting]:
        raise NotImplementedError

    def run_queries(
        self,
        queries: Iterable[Q],
        search: Callable[[Q], list[RawPosting]],
        delay: float,
    ) -> list[RawPosting]:
        postings: list[RawPosting] = []
        for index, query in enumerate(queries):
            if index and delay > 0:
                time.sleep(delay)
            try:
                postings.extend(search(query))
            except UpstreamRateLimited:
                logger.warning("[%s] rate limited at query %r, skipping the rest of this run", self.source_name, query)
                break
            except (httpx.HTTPError, MalformedResponse) as exc:
                logger.warning("[%s] query %r failed: %s", self.source_name, query, exc)
            except PARSE_ERRORS as exc:
                logger.warning("[%s] could not parse postings for query %r: %r", self.source_name, query, exc)
        return postings
