"""lookalike: identity, platform and similarity checks for npm package names."""

__version__ = "0.1.0"

from lookalike.names import normalize_package_name  # noqa: E402
from lookalike.platforms import is_platform_specific_package  # noqa: E402
from lookalike.similarity import (  # noqa: E402
    SimilarityResult,
    SimilarityTier,
    find_similar_packages,
    score_similarity,
)

__all__ = [
    "SimilarityResult",
    "SimilarityTier",
    "__version__",
    "find_similar_packages",
    "is_platform_specific_package",
    "normalize_package_name",
    "score_similarity",
]
