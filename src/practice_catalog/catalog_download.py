"""Fetch a practice catalog from a remote HTTPS URL.

A remote catalog is untrusted input. Before it reaches the engine:

- the host must be on an allowlist (subdomains included) and must not
  resolve to a literal private, loopback or link-local address
- redirects are refused, so the allowlist cannot be bypassed
- the body is streamed with a byte ceiling and a question count ceiling
- the payload must pass the PracticeCatalog schema
"""

import ipaddress
import json
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from .schema import PracticeCatalog

logger = logging.getLogger(__name__)

MAX_CATALOG_BYTES = 5 * 1024 * 1024
MAX_QUESTION_COUNT = 1000
REQUEST_TIMEOUT = (10, 30)  # (connect, read) seconds
CHUNK_SIZE = 64 * 1024

ACCEPTED_CONTENT_TYPES = ("json", "octet-stream", "text/plain")
REQUIRED_CATALOG_KEYS = ("questions", "version")
REQUIRED_QUESTION_KEYS = ("id", "category")

# Cloud metadata endpoints and local names
BLOCKED_HOSTNAMES = frozenset([
    "localhost",
    "metadata.google.internal",
    "metadata.goog",
    "169.254.169.254",
    "100.100.100.200",
])

# Suffix matched, so "github.io" also admits "org.github.io"
CATALOG_ALLOWED_DOMAINS = frozenset([
    "github.com",
    "githubusercontent.com",
    "github.io",
    "blob.core.windows.net",
    "s3.amazonaws.com",
    "storage.googleapis.com",
])


class CatalogDownloadError(Exception):
    """Raised when a remote catalog cannot be downloaded or validated."""


def _is_internal_address(hostname: str) -> bool:
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved


def _host_allowed(hostname: str, allowed_domains: frozenset[str]) -> bool:
    return any(
        hostname == domain or hostname.endswith("." + domain)
        for domain in allowed_domains
    )


def _validate_catalog_url(
    url: str,
    allowed_domains: frozenset[str],
) -> tuple[bool, str]:
    """Check scheme, host and address of a catalog URL.

    Returns:
        Tuple of (is_valid, reason). The reason is empty when valid.
    """
    try:
        parsed = urlparse(url)
        hostname = (parsed.hostname or "").lower()
    except ValueError:
        return False, "Invalid URL format"

    if parsed.scheme.lower() != "https":
        return False, "URL scheme must be HTTPS"
    if not hostname:
        return False, "URL must have a hostname"
    if hostname in BLOCKED_HOSTNAMES:
        return False, "URL hostname is blocked"
    if _is_internal_address(hostname):
        return False, "URL points to a private/internal IP address"
    if not _host_allowed(hostname, allowed_domains):
        return False, f"URL domain '{hostname}' is not in the allowed list"
    return True, ""


def _validate_catalog_structure(data) -> PracticeCatalog:
    """Run cheap shape checks, then full schema validation.

    The shape checks give readable errors for files that are clearly not
    a practice catalog before pydantic reports every field.
    """
    if not isinstance(data, dict):
        raise CatalogDownloadError("Catalog must be a JSON object with a 'questions' key.")

    missing = [key for key in REQUIRED_CATALOG_KEYS if key not in data]
    if "questions" in missing:
        raise CatalogDownloadError("Catalog is missing the required 'questions' field.")

    questions = data["questions"]
    if not isinstance(questions, list):
        raise CatalogDownloadError("'questions' must be a JSON array.")
    if not questions:
        raise CatalogDownloadError("Catalog contains no questions.")
    if len(questions) > MAX_QUESTION_COUNT:
        raise CatalogDownloadError(
            f"Catalog has {len(questions)} questions, which exceeds the maximum "
            f"of {MAX_QUESTION_COUNT}."
        )
    if missing:
        raise CatalogDownloadError("Catalog is missing the 'version' field.")

    for index, entry in enumerate(questions):
        if not isinstance(entry, dict):
            raise CatalogDownloadError(f"Question at index {index} is not a JSON object.")
        absent = [key for key in REQUIRED_QUESTION_KEYS if key not in entry]
        if absent:
            raise CatalogDownloadError(
                f"Question at index {index} lacks required keys: {', '.join(absent)}."
            )

    try:
        return PracticeCatalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogDownloadError(
            f"Catalog failed schema validation ({exc.error_count()} error(s)): {exc}"
        ) from exc


def _fetch(url: str) -> requests.Response:
    try:
        return requests.get(
            url,
            timeout=REQUEST_TIMEOUT,
            stream=True,
            headers={"Accept": "application/json"},
            allow_redirects=False,
        )
    except requests.ConnectionError as exc:
        raise CatalogDownloadError("Could not connect to the catalog URL.") from exc
    except requests.Timeout as exc:
        raise CatalogDownloadError("Request timed out while downloading the catalog.") from exc
    except requests.RequestException as exc:
        raise CatalogDownloadError(f"Network error: {exc}") from exc


def _check_response(resp: requests.Response) -> None:
    status = resp.status_code
    if 300 <= status < 400:
        raise CatalogDownloadError(
            f"The URL returned a redirect (HTTP {status}); use the direct URL of the catalog file."
        )
    if status != 200:
        raise CatalogDownloadError(f"Server returned HTTP {status} for the catalog URL.")

    content_type = resp.headers.get("Content-Type", "")
    if content_type and not any(t in content_type for t in ACCEPTED_CONTENT_TYPES):
        raise CatalogDownloadError(
            f"Unexpected Content-Type '{content_type}'; expected a JSON file."
        )


def _read_body(resp: requests.Response) -> bytes:
    """Read the streamed body, stopping once it passes the size ceiling."""
    body = bytearray()
    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
        body.extend(chunk)
        if len(body) > MAX_CATALOG_BYTES:
            raise CatalogDownloadError(
                f"Catalog exceeds the maximum allowed size of {MAX_CATALOG_BYTES} bytes."
            )
    if not body:
        raise CatalogDownloadError("Downloaded file is empty.")
    return bytes(body)


def download_catalog(
    url: str,
    *,
    output: Optional[Path] = None,
    allowed_domains: Optional[frozenset[str]] = None,
) -> tuple[PracticeCatalog, Optional[Path]]:
    """Download and validate a catalog, optionally saving it to disk.

    Args:
        url: HTTPS URL of a catalog JSON file
        output: Where to save the file; nothing is written when omitted
        allowed_domains: Replaces the default host allowlist

    Returns:
        Tuple of (catalog, saved path or None).

    Raises:
        CatalogDownloadError: On any validation or network failure.
    """
    valid, reason = _validate_catalog_url(url, allowed_domains or CATALOG_ALLOWED_DOMAINS)
    if not valid:
        raise CatalogDownloadError(f"Invalid URL: {reason}")

    logger.info("Downloading catalog from %s", url)
    resp = _fetch(url)
    try:
        _check_response(resp)
        raw = _read_body(resp)
    finally:
        resp.close()

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogDownloadError(f"Downloaded file is not valid JSON: {exc}") from exc

    catalog = _validate_catalog_structure(data)
    logger.info(
        "Downloaded catalog version %s with %d questions",
        catalog.version, len(catalog.questions)
    )

    if output is None:
        return catalog, None

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2), encoding="utf-8")
    logger.info("Remote catalog saved to %s", output)
    return catalog, output
