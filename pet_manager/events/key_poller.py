"""Input device adapter: bounded key polling on top of blessed."""

from __future__ import annotations

from typing import Protocol

from blessed import Terminal

# blessed key names -> the names the app binds
_KEY_NAMES = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_TAB": "tab",
}

_CONTROL_CHARS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x11": "ctrl+q",
    "\x18": "ctrl+x",
}


class KeyPoller(Protocol):
    def poll(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for one key. None on timeout."""
        ...


def normalize_key(keystroke) -> str | None:
    """Map a blessed ``Keystroke`` to a key name, or None if empty/unknown."""
    if not keystroke:
        return None
    if keystroke.is_sequence:
        name = _KEY_NAMES.get(keystroke.name)
        if name is not None:
            return name
        # Sequences we don't bind (F-keys, Home, ...) still carry their name
        return keystroke.name.lower() if keystroke.name else None
    text = str(keystroke)
    if text in _CONTROL_CHARS:
        return _CONTROL_CHARS[text]
    if len(text) == 1 and text.isprintable():
        return text
    return None


class TerminalKeyPoller:
    """Reads keys from a blessed Terminal already in cbreak mode."""

    def __init__(self, term: Terminal) -> None:
        self.term = term

    def poll(self, timeout: float) -> str | None:
        return normalize_key(self.term.inkey(timeout=timeout))
