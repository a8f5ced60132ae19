"""Keyboard events as seen by the screens and widgets."""

from __future__ import annotations

from dataclasses import dataclass

SPECIAL_KEYS = frozenset(
    {
        "enter",
        "esc",
        "tab",
        "backtab",
        "up",
        "down",
        "left",
        "right",
        "backspace",
        "delete",
        "home",
        "end",
        "pageup",
        "pagedown",
    }
)

_ALIASES = {
    "return": "enter",
    "escape": "esc",
    "shift+tab": "backtab",
    "shift-tab": "backtab",
    "del": "delete",
    "page_up": "pageup",
    "page_down": "pagedown",
}


@dataclass(frozen=True)
class Key:
    """A key press: either a named key or a printable character.

    Character keys have ``code == "char"`` and carry the character in ``char``.
    """

    code: str
    char: str | None = None

    def __post_init__(self) -> None:
        if self.code == "char":
            if self.char is None or len(self.char) != 1:
                raise ValueError("a character key needs exactly one character")
        elif self.code not in SPECIAL_KEYS:
            raise ValueError(f"unknown key code: {self.code!r}")
        elif self.char is not None:
            raise ValueError(f"key {self.code!r} carries no character")

    @classmethod
    def from_char(cls, char: str) -> Key:
        """Build the key for a printable character."""
        return cls("char", char)

    @property
    def is_char(self) -> bool:
        return self.code == "char"


def parse_key(name: str) -> Key:
    """Turn a key description such as ``"enter"``, ``"shift+tab"`` or ``"y"`` into a Key."""
    if not name:
        raise ValueError("empty key name")
    if len(name) == 1:
        return Key.from_char(name)
    lowered = name.strip().lower()
    if lowered == "space":
        return Key.from_char(" ")
    code = _ALIASES.get(lowered, lowered)
    if code not in SPECIAL_KEYS:
        raise ValueError(f"unknown key: {name!r}")
    return Key(code)