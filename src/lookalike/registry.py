"""Minimal client for the npm registry.

Two calls are needed by the rest of lookalike: a cheap existence check
(``HEAD /<name>``) and the search endpoint (``GET /-/v1/search``). Both go
through :mod:`requests` with an explicit timeout and a lookalike
``User-Agent``.

The existence check never raises: any failure means "does not exist".
Search failures raise :class:`RegistryError` so callers can tell them
apart from an empty result if they need to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from lookalike import __version__
from lookalike.logging import get_logger
from lookalike.names import encode_package_path

log = get_logger("registry")

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
DEFAULT_SEARCH_SIZE = 10
DEFAULT_TIMEOUT = 10.0

_SEARCH_PATH = "/-/v1/search"
_USER_AGENT = f"lookalike/{__version__}"


class RegistryError(Exception):
    """Raised when a registry search cannot be completed."""


@dataclass(frozen=True)
class SearchCandidate:
    """One package record returned by a registry search."""

    name: str
    description: str | None = None


def package_url(name: str, *, registry_url: str = DEFAULT_REGISTRY_URL) -> str:
    """Return the registry document URL for *name*."""
    return f"{registry_url.rstrip('/')}/{encode_package_path(name)}"


def package_exists(
    name: str,
    *,
    registry_url: str = DEFAULT_REGISTRY_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> bool:
    """Check whether *name* is published on the registry.

    Args:
        name: The package name, optionally scoped.
        registry_url: Base URL of the registry.
        timeout: HTTP request timeout in seconds.

    Returns:
        True if the registry answered the request with a 2xx status.
    """
    url = package_url(name, registry_url=registry_url)
    try:
        resp = requests.head(
            url,
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT},
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        log.warning("Existence check for %s failed: %s", name, exc)
        return False

    if resp.status_code == 404:
        log.debug("Package %s not found (404)", name)
        return False
    if not 200 <= resp.status_code < 300:
        log.warning("Registry returned %d for %s", resp.status_code, name)
        return False
    return True


def _parse_search_object(obj: Any) -> SearchCandidate | None:
    if not isinstance(obj, dict):
        return None
    pkg = obj.get("package")
    if not isinstance(pkg, dict):
        return None
    name = pkg.get("name")
    if not isinstance(name, str) or not name:
        return None
    description = pkg.get("description")
    if not isinstance(description, str):
        description = None
    return SearchCandidate(name=name, description=description)


def search_packages(
    query: str,
    *,
    size: int = DEFAULT_SEARCH_SIZE,
    registry_url: str = DEFAULT_REGISTRY_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[SearchCandidate]:
    """Run a registry text search and return the matching packages.

    Results keep the registry's order. Entries without a usable name are
    skipped.

    Args:
        query: Free-text search query.
        size: Maximum number of results to request.
        registry_url: Base URL of the registry.
        timeout: HTTP request timeout in seconds.

    Returns:
        The candidate packages.

    Raises:
        RegistryError: On transport errors, a non-200 status, or a payload
            that is not a search result.
    """
    url = f"{registry_url.rstrip('/')}{_SEARCH_PATH}"
    try:
        resp = requests.get(
            url,
            params={"text": query, "size": size},
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT},
        )
    except requests.Timeout as exc:
        raise RegistryError(f"Timeout searching for {query!r}") from exc
    except requests.RequestException as exc:
        raise RegistryError(f"Request error searching for {query!r}: {exc}") from exc

    if resp.status_code != 200:
        raise RegistryError(f"Registry returned {resp.status_code} searching for {query!r}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise RegistryError(f"Invalid JSON in search response for {query!r}") from exc

    objects = data.get("objects") if isinstance(data, dict) else None
    if not isinstance(objects, list):
        raise RegistryError(f"Malformed search response for {query!r}: no 'objects' list")

    candidates: list[SearchCandidate] = []
    for obj in objects:
        candidate = _parse_search_object(obj)
        if candidate is None:
            log.debug("Skipping malformed search entry for %r: %r", query, obj)
            continue
        candidates.append(candidate)
    log.debug("Search for %r returned %d candidate(s)", query, len(candidates))
    return candidates
