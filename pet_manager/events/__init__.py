"""Keyboard + timer event multiplexing."""

from .event_source import EventSource
from .event_types import Event, InputDeviceError, InputEvent, SourceFailure, TickEvent
from .key_poller import KeyPoller, TerminalKeyPoller, normalize_key
