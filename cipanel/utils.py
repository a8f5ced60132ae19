"""String helpers used when laying out text in the terminal panels."""

_ELLIPSIS = "..."


def truncate_string(s: str, max_len: int) -> str:
    """Shorten ``s`` to ``max_len`` characters, ending in "..." when cut.

    When ``max_len`` is smaller than the ellipsis, only the ellipsis is kept.
    """
    if len(s) <= max_len:
        return s
    keep = max(max_len - len(_ELLIPSIS), 0)
    return s[:keep] + _ELLIPSIS