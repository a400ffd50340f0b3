"""Remote vulnerability lookup exceptions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jaudit.exceptions.base import JauditError

if TYPE_CHECKING:
    from jaudit.model import ScanResult


class RemoteLookupError(JauditError):
    """Base class for failures of the batched vulnerability query."""


class TransportError(RemoteLookupError):
    """Raised when the request could not be completed (timeout, connection failure)."""


class ServerError(RemoteLookupError):
    """Raised when the lookup service answers with a non-success status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Vulnerability service returned status {status}")
        self.status = status


class DecodeError(RemoteLookupError):
    """Raised when the response body does not have the expected shape."""


class ProtocolMismatchError(RemoteLookupError):
    """Raised when the response is not positionally aligned with the request."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Vulnerability service returned {actual} results for {expected} queries")
        self.expected = expected
        self.actual = actual


class LookupPhaseError(JauditError):
    """Raised when the dependency lookup phase fails as a whole.

    ``cached_results`` holds the vulnerable packages served from cache before the
    failure, and ``cache_hits``/``cache_misses`` the partition counts, so callers
    can still report them alongside the error.
    """

    def __init__(
        self,
        cause: RemoteLookupError,
        cached_results: Sequence[ScanResult] = (),
        *,
        cache_hits: int = 0,
        cache_misses: int = 0,
    ) -> None:
        super().__init__(f"Vulnerability lookup failed: {cause}")
        self.cause = cause
        self.cached_results: tuple[ScanResult, ...] = tuple(cached_results)
        self.cache_hits = cache_hits
        self.cache_misses = cache_misses
