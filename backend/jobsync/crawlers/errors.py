from __future__ import annotations


class SourceError(Exception):
    """An upstream failure that an adapter contains instead of propagating."""


class UpstreamRateLimited(SourceError):
    """The upstream answered 429; no further queries go to it this run."""


class MalformedResponse(SourceError):
    """The upstream answered 2xx with a body we cannot interpret."""
