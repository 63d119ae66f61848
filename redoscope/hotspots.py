"""
Hotspot annotation.

Wraps the spans of a pattern that drive backtracking in marker pairs so they
stand out in plain text and markdown.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import HotspotSpan


@dataclass(frozen=True)
class MarkerStyles:
    """Opening/closing markers for heat spans and for every other temperature."""
    heat: tuple[str, str] = ("**", "**")
    other: tuple[str, str] = ("_", "_")

    def markers_for(self, temperature: str) -> tuple[str, str]:
        return self.heat if temperature == "heat" else self.other


DEFAULT_STYLES = MarkerStyles()


def render_hotspots(
    source: str,
    hotspots: Iterable[HotspotSpan],
    styles: MarkerStyles = DEFAULT_STYLES,
) -> str:
    """
    Annotate a pattern with its hotspot spans.

    Spans must be sorted by start and must not overlap; they are walked in the
    order given. Text between and after spans is copied unchanged.

    Args:
        source: The analyzed pattern the span offsets refer to
        hotspots: Spans in ascending, non-overlapping order
        styles: Marker pairs to use

    Returns:
        The annotated pattern text
    """
    pieces: list[str] = []
    cursor = 0

    for span in hotspots:
        if cursor < span.start:
            pieces.append(source[cursor:span.start])
        opening, closing = styles.markers_for(span.temperature)
        pieces.append(f"{opening}{source[span.start:span.end]}{closing}")
        cursor = span.end

    if cursor < len(source):
        pieces.append(source[cursor:])

    return "".join(pieces)
