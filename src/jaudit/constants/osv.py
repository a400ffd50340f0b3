"""Constants for the OSV batch query protocol."""

from __future__ import annotations

OSV_QUERY_BATCH_URL: str = "https://api.osv.dev/v1/querybatch"
OSV_ECOSYSTEM: str = "Maven"
DEFAULT_LOOKUP_TIMEOUT_SECONDS: float = 10.0
PURL_MAVEN_PREFIX: str = "pkg:maven"

REQUEST_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
