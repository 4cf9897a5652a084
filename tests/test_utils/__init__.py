"""Deterministic stand-ins for the terminal, the clock and the renderer."""

from .fakes import (
    ListEventSource,
    ManualClock,
    RecordingRenderer,
    ScriptedPoller,
    fail_writes,
)
