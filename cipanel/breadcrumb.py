"""Breadcrumb trail text for screen headers."""

from collections.abc import Iterable

SEPARATOR = " › "


def render_breadcrumb(segments: Iterable[str]) -> str:
    """Join path segments into a breadcrumb trail."""
    return SEPARATOR.join(segments)