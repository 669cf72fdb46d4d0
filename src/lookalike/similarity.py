"""Rank registry search results by how closely they resemble a query name.

Every candidate is put into one of three tiers:

* ``exact-match``: the same string as the query;
* ``very-similar``: a different spelling of the same normalized key
  (``es-build`` for ``esbuild``);
* ``similar``: normalized keys within :data:`SIMILARITY_THRESHOLD` edits
  of each other (``sebuild`` for ``esbuild``).

Anything further away is excluded from the results.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from rapidfuzz.distance import Levenshtein

from lookalike.logging import get_logger
from lookalike.names import normalize_package_name
from lookalike.registry import search_packages

log = get_logger("similarity")

# Maximum edit distance between normalized keys for the "similar" tier.
SIMILARITY_THRESHOLD = 2


class SimilarityTier(enum.Enum):
    """How closely a candidate name matches the query."""

    EXACT_MATCH = "exact-match"
    VERY_SIMILAR = "very-similar"
    SIMILAR = "similar"

    @property
    def rank(self) -> int:
        """Sort position; lower ranks sort first."""
        return _TIER_RANK[self]


_TIER_RANK: dict[SimilarityTier, int] = {
    SimilarityTier.EXACT_MATCH: 0,
    SimilarityTier.VERY_SIMILAR: 1,
    SimilarityTier.SIMILAR: 2,
}


@dataclass(frozen=True)
class SimilarityResult:
    """A search candidate together with its similarity tier."""

    name: str
    description: str | None
    similarity: SimilarityTier

    def to_dict(self) -> dict[str, str]:
        """Serialise to a plain dict, omitting a missing description."""
        d = {"name": self.name}
        if self.description is not None:
            d["description"] = self.description
        d["similarity"] = self.similarity.value
        return d


# Candidates are objects with ``name``/``description`` attributes (such as
# registry.SearchCandidate) or mappings, either flat or in the npm search
# ``{"package": {...}}`` shape.
SearchFunc = Callable[[str], Iterable[Any]]


def levenshtein_distance(a: str, b: str) -> int:
    """Return the unit-cost edit distance between *a* and *b*."""
    return int(Levenshtein.distance(a, b))


def score_similarity(
    query: str,
    candidate: str,
    *,
    threshold: int = SIMILARITY_THRESHOLD,
) -> SimilarityTier | None:
    """Classify *candidate* against *query*.

    Args:
        query: The name the user asked for.
        candidate: A name returned by the registry.
        threshold: Maximum edit distance on normalized keys for the
            ``similar`` tier.

    Returns:
        The matching tier, or ``None`` if the candidate should be excluded.
    """
    if candidate == query:
        return SimilarityTier.EXACT_MATCH

    query_key = normalize_package_name(query)
    candidate_key = normalize_package_name(candidate)
    if candidate_key == query_key:
        return SimilarityTier.VERY_SIMILAR
    if levenshtein_distance(candidate_key, query_key) <= threshold:
        return SimilarityTier.SIMILAR
    return None


def _candidate_fields(candidate: Any) -> tuple[str | None, str | None]:
    if isinstance(candidate, Mapping):
        record = candidate.get("package", candidate)
        if not isinstance(record, Mapping):
            return None, None
        name = record.get("name")
        description = record.get("description")
    else:
        name = getattr(candidate, "name", None)
        description = getattr(candidate, "description", None)
    if not isinstance(name, str):
        return None, None
    if not isinstance(description, str):
        description = None
    return name, description


def rank_similar_packages(
    query: str,
    candidates: Iterable[Any],
    *,
    threshold: int = SIMILARITY_THRESHOLD,
) -> list[SimilarityResult]:
    """Score, deduplicate and sort search candidates.

    Excluded candidates are dropped, only the first occurrence of each
    name is kept, and the survivors are sorted by tier. The sort is
    stable, so candidates in the same tier keep their input order.
    """
    seen: set[str] = set()
    results: list[SimilarityResult] = []
    for candidate in candidates:
        name, description = _candidate_fields(candidate)
        if name is None:
            log.debug("Ignoring candidate without a name: %r", candidate)
            continue
        tier = score_similarity(query, name, threshold=threshold)
        if tier is None or name in seen:
            continue
        seen.add(name)
        results.append(SimilarityResult(name=name, description=description, similarity=tier))

    results.sort(key=lambda r: r.similarity.rank)
    return results


def find_similar_packages(
    query: str,
    *,
    search: SearchFunc | None = None,
    threshold: int = SIMILARITY_THRESHOLD,
) -> list[SimilarityResult]:
    """Search the registry for packages whose names resemble *query*.

    The search is called exactly once. If it fails for any reason the
    failure is logged and an empty list is returned; callers cannot
    distinguish a failed search from one without matches.

    Args:
        query: The package name to look for.
        search: Callable returning candidates for a query. Defaults to
            :func:`lookalike.registry.search_packages`.
        threshold: Maximum edit distance for the ``similar`` tier.

    Returns:
        The ranked results, best tier first.
    """
    search = search or search_packages
    try:
        # Lazy iterables fail during list(), not during the call.
        candidates = list(search(query))
    except Exception as exc:
        log.warning("Similar-package search for %r failed: %s", query, exc)
        return []

    results = rank_similar_packages(query, candidates, threshold=threshold)
    log.debug(
        "Found %d similar package(s) for %r among %d candidate(s)",
        len(results),
        query,
        len(candidates),
    )
    return results
