"""Text formatting helpers for lookalike's command-line output."""

from __future__ import annotations

from collections.abc import Sequence

from lookalike.similarity import SimilarityResult, SimilarityTier

_TIER_LABELS: dict[SimilarityTier, str] = {
    SimilarityTier.EXACT_MATCH: "✓ exact",
    SimilarityTier.VERY_SIMILAR: "≈ very similar",
    SimilarityTier.SIMILAR: "~ similar",
}


def format_similarity_label(tier: SimilarityTier) -> str:
    """Return a short human-readable label for a similarity tier."""
    return _TIER_LABELS[tier]


def truncate(text: str, max_width: int) -> str:
    """Shorten *text* to *max_width* characters, ending in ``...`` if cut."""
    if len(text) <= max_width:
        return text
    if max_width <= 3:
        return text[:max_width]
    return text[: max_width - 3] + "..."


def format_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    max_col_width: dict[int, int] | None = None,
    indent: int = 0,
) -> str:
    """Format rows as a left-aligned text table.

    Column widths are taken from the widest cell. Columns listed in
    *max_col_width* are truncated first. Short rows are padded with empty
    cells; trailing whitespace is stripped from every line.
    """
    if not headers:
        return ""

    ncols = len(headers)
    limits = max_col_width or {}

    table: list[list[str]] = []
    for row in [list(headers), *(list(r) for r in rows)]:
        cells = (row + [""] * ncols)[:ncols]
        for ci, limit in limits.items():
            if ci < ncols:
                cells[ci] = truncate(cells[ci], limit)
        table.append(cells)

    widths = [max(len(row[ci]) for row in table) for ci in range(ncols)]
    prefix = " " * indent
    return "\n".join(
        (prefix + "  ".join(cell.ljust(widths[ci]) for ci, cell in enumerate(row))).rstrip()
        for row in table
    )


def format_similarity_table(
    results: Sequence[SimilarityResult],
    *,
    max_description_width: int = 60,
) -> str:
    """Render ranked similarity results as a table."""
    rows = [
        [r.name, format_similarity_label(r.similarity), r.description or ""] for r in results
    ]
    return format_table(
        ["Package", "Match", "Description"],
        rows,
        max_col_width={2: max_description_width},
    )
