"""Batched vulnerability lookups against the OSV ``querybatch`` endpoint."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from jaudit.constants.osv import (
    DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    OSV_ECOSYSTEM,
    OSV_QUERY_BATCH_URL,
    REQUEST_HEADERS,
)
from jaudit.exceptions import DecodeError, ProtocolMismatchError, ServerError, TransportError
from jaudit.model import PackageCoordinate, VulnerabilityRecord
from jaudit.scanner.pipeline.conversion import record_from_dict
from jaudit.types import JsonObject

logger = logging.getLogger(__name__)


def build_batch_request(coordinates: Sequence[PackageCoordinate]) -> JsonObject:
    """Encode every coordinate as one query of a single batch body."""
    return {
        "queries": [
            {
                "package": {"name": coordinate.osv_name, "ecosystem": OSV_ECOSYSTEM},
                "version": coordinate.version,
            }
            for coordinate in coordinates
        ]
    }


def decode_batch_response(payload: object, expected: int) -> list[tuple[VulnerabilityRecord, ...]]:
    """Decode a ``querybatch`` body into per-query record tuples.

    Element ``i`` belongs to query ``i``; there is no identifier to check
    against, so any length difference is rejected instead of zipped. Every
    advisory must be an object with an ``id``: dropping one would turn a
    vulnerable package into a cached "known safe" answer.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Response body is not a JSON object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeError("Response body has no 'results' list")
    if len(results) != expected:
        raise ProtocolMismatchError(expected=expected, actual=len(results))

    decoded: list[tuple[VulnerabilityRecord, ...]] = []
    for index, result in enumerate(results):
        if not isinstance(result, dict):
            raise DecodeError(f"Result {index} is not a JSON object")
        vulns = result.get("vulns")
        if vulns is not None and not isinstance(vulns, list):
            raise DecodeError(f"Result {index} has a non-list 'vulns' field")
        decoded.append(_decode_advisories(index, vulns or []))
    return decoded


def _decode_advisories(index: int, vulns: list[object]) -> tuple[VulnerabilityRecord, ...]:
    records: list[VulnerabilityRecord] = []
    for position, raw in enumerate(vulns):
        record = record_from_dict(raw)
        if record is None:
            raise DecodeError(f"Result {index} advisory {position} is not an object with an 'id'")
        records.append(record)
    return tuple(records)


class BatchLookupClient:
    """Issue one POST per lookup covering every requested coordinate.

    Failures are never retried here: timeouts and connection problems raise
    ``TransportError``, non-200 answers ``ServerError``, malformed bodies
    ``DecodeError`` and misaligned result lists ``ProtocolMismatchError``.

    ``timeout`` bounds the whole call, from connecting until the last body
    byte; a server trickling its answer cannot stretch it. ``lookup`` drives
    its own event loop and must not be called from a running one.
    """

    def __init__(
        self,
        *,
        url: str = OSV_QUERY_BATCH_URL,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    def lookup(self, coordinates: Sequence[PackageCoordinate]) -> list[tuple[VulnerabilityRecord, ...]]:
        """Return advisories for each coordinate, positionally aligned with the input."""
        if not coordinates:
            return []

        body = build_batch_request(coordinates)
        logger.debug("Querying %s for %d packages", self._url, len(coordinates))
        payload = asyncio.run(self._post_with_deadline(body))
        return decode_batch_response(payload, expected=len(coordinates))

    async def _post_with_deadline(self, body: JsonObject) -> object:
        try:
            return await asyncio.wait_for(self._post(body), timeout=self._timeout)
        except TimeoutError as exc:
            raise TransportError(f"Request to {self._url} timed out after {self._timeout:g}s") from exc

    async def _post(self, body: JsonObject) -> object:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=body, headers=REQUEST_HEADERS)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request to {self._url} timed out after {self._timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {self._url} failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise ServerError(response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
