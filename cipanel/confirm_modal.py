"""Yes/No confirmation popup, used e.g. before rerunning a workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cipanel.keys import Key

YES_BUTTON = 0
NO_BUTTON = 1


class ConfirmAction(Enum):
    """Outcome of a key press in the confirmation popup."""

    NONE = "none"
    YES = "yes"
    NO = "no"


@dataclass
class ConfirmModal:
    """A popup asking the user to confirm an action."""

    message: str
    visible: bool = True
    selected_button: int = YES_BUTTON

    def handle_input(self, key: Key) -> ConfirmAction:
        """React to a key press and report what the user chose."""
        match key:
            case Key(code="char", char="y") | Key(code="enter"):
                return ConfirmAction.YES
            case Key(code="char", char="n") | Key(code="esc"):
                return ConfirmAction.NO
            case Key(code="left"):
                self.selected_button = YES_BUTTON
            case Key(code="right") | Key(code="tab"):
                self.selected_button = NO_BUTTON
        return ConfirmAction.NONE

    def is_visible(self) -> bool:
        return self.visible

    def hide(self) -> None:
        self.visible = False