"""Popup showing an error, with optional details and retry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cipanel.keys import Key

BASE_HEIGHT = 12
MIN_DETAIL_LINES = 3
MAX_DETAIL_LINES = 15
MAX_HEIGHT = 80


class ErrorAction(Enum):
    """Outcome of a key press in the error popup."""

    NONE = "none"
    CLOSE = "close"
    RETRY = "retry"


@dataclass
class ErrorModal:
    """A popup reporting an error message to the user."""

    title: str
    error_message: str
    details: str | None = None
    visible: bool = True
    details_expanded: bool = False
    can_retry: bool = False

    @classmethod
    def with_details(cls, title: str, error_message: str, details: str) -> ErrorModal:
        """Build a modal that can also show technical details."""
        return cls(title, error_message, details)

    def with_retry(self) -> ErrorModal:
        """Allow the user to retry the failed operation; returns the modal."""
        self.can_retry = True
        return self

    def handle_input(self, key: Key) -> ErrorAction:
        """React to a key press and report what the user asked for."""
        match key:
            case Key(code="char", char="c") | Key(code="enter") | Key(code="esc"):
                return ErrorAction.CLOSE
            case Key(code="char", char="r") if self.can_retry:
                return ErrorAction.RETRY
            case Key(code="char", char="d") if self.details is not None:
                self.details_expanded = not self.details_expanded
        return ErrorAction.NONE

    def is_visible(self) -> bool:
        return self.visible

    def hide(self) -> None:
        self.visible = False

    def modal_height(self) -> int:
        """Height of the popup as a percentage of the screen."""
        detail_lines = 0
        if self.details_expanded and self.details is not None:
            count = max(len(self.details.splitlines()), MIN_DETAIL_LINES)
            detail_lines = min(count, MAX_DETAIL_LINES)
        return min(BASE_HEIGHT + detail_lines, MAX_HEIGHT)