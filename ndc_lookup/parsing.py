"""Parsing helpers for NDC codes."""
from __future__ import annotations

# Labeler, product and package segment widths of an 11-digit NDC.
SEGMENT_WIDTHS = (5, 4, 2)


def _pad_segment(segment: str, width: int) -> str:
    if len(segment) == width - 1:
        return "0" + segment
    return segment


def normalize_ndc(value: str) -> str:
    """Pack a hyphenated 10-digit NDC into its 11-digit form.

    ``1234-123-1`` becomes ``01234012301``. Codes without a hyphen are
    returned unchanged, and hyphenated codes without exactly three segments
    only lose their hyphens.
    """

    if "-" not in value:
        return value
    parts = value.split("-")
    if len(parts) != len(SEGMENT_WIDTHS):
        return "".join(parts)
    return "".join(_pad_segment(part, width) for part, width in zip(parts, SEGMENT_WIDTHS))


__all__ = ["normalize_ndc"]
