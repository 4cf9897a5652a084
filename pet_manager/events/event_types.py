"""Events flowing from the event source to the app loop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InputEvent:
    """A key press, as a normalized key name (``"up"``, ``"enter"``, ``"a"``)."""

    key: str


@dataclass(frozen=True)
class TickEvent:
    """Periodic re-render signal. No payload."""


@dataclass(frozen=True)
class SourceFailure:
    """Sent once when the input device fails; the source stops after it."""

    error: BaseException


Event = InputEvent | TickEvent


class InputDeviceError(RuntimeError):
    """The event source died because the input device failed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"input device failed: {cause!r}")
