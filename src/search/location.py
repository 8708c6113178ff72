"""
Service-area location strings.

Locations are free-form and comma-delimited, e.g.
``"Delhi, Connaught Place, Block A"``. A provider registered under a
leading prefix of the query (``"Delhi"``) is still found by the more
specific query because every right-truncated variant of it is tried.
"""

SEGMENT_SEPARATOR = ","
JOINER = ", "


def split_segments(location: str) -> list[str]:
    """Split a location into trimmed, non-empty segments."""
    return [
        segment.strip()
        for segment in location.split(SEGMENT_SEPARATOR)
        if segment.strip()
    ]


def normalize_location(location: str) -> str:
    """Canonical form of a location: trimmed segments joined by ``", "``."""
    return JOINER.join(split_segments(location))


def expand_location(location: str) -> list[str]:
    """
    Expand a location into its progressively right-truncated variants.

    ``"A, B, C"`` expands to ``["A, B, C", "A, B", "A"]``: the full
    (normalized) string first, then one trailing segment removed per step
    until only the first segment remains.

    Args:
        location: Comma-delimited location string

    Returns:
        One variant per segment, most specific first. Empty when the
        location has no non-empty segments.
    """
    segments = split_segments(location)
    return [JOINER.join(segments[:count]) for count in range(len(segments), 0, -1)]
