"""Application state machine: turns events into store calls and view models.

States are ``Home`` and ``Pets``; ``Pets`` has an optional ``Adding``
sub-state while the add form is open. Every store failure leaves the state
exactly where it was and surfaces as a status message.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import FORM_KEYS, KEYS, MESSAGE_TICKS
from ..events import InputDeviceError, InputEvent, SourceFailure, TickEvent
from ..fs_store import PetRecord, PetRecordList, WriteError
from ..log import pet_log
from .form import FormError, PetForm
from .menu import MenuItem


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: str = "info"  # "info" | "error"


@dataclass(frozen=True)
class ViewModel:
    """Read-only snapshot handed to the renderer each frame."""

    menu: MenuItem
    records: tuple[PetRecord, ...]
    cursor: int | None
    form: PetForm | None = None
    message: StatusMessage | None = None

    @property
    def selected(self) -> PetRecord | None:
        if self.cursor is None:
            return None
        return self.records[self.cursor]


class PetApp:
    """Single-threaded consumer of the merged event stream."""

    def __init__(self, store: PetRecordList, message_ticks: int = MESSAGE_TICKS):
        self.store = store
        self.message_ticks = message_ticks
        self.menu = MenuItem.HOME
        self.cursor: int | None = None
        self.form: PetForm | None = None
        self.message: StatusMessage | None = None
        self.running = True
        self._message_ttl = 0

    def handle(self, event) -> bool:
        """Apply one event. Returns False once the user has quit."""
        if isinstance(event, TickEvent):
            self._on_tick()
        elif isinstance(event, InputEvent):
            self._on_key(event.key)
        elif isinstance(event, SourceFailure):
            raise InputDeviceError(event.error) from event.error
        else:
            raise TypeError(f"Unknown event: {event!r}")
        return self.running

    def view(self) -> ViewModel:
        return ViewModel(
            menu=self.menu,
            records=tuple(self.store.records),
            cursor=self.cursor,
            form=self.form.snapshot() if self.form is not None else None,
            message=self.message,
        )

    # -- Event handlers --

    def _on_tick(self) -> None:
        if self.message is None:
            return
        self._message_ttl -= 1
        if self._message_ttl <= 0:
            self.message = None

    def _on_key(self, key: str) -> None:
        if key in KEYS["force_quit"] or (self.form is None and key in KEYS["quit"]):
            pet_log("Quit requested")
            self.running = False
        elif self.form is not None:
            self._on_form_key(key)
        elif key in KEYS["home"]:
            self.menu = MenuItem.HOME
            self.cursor = None
        elif key in KEYS["pets"]:
            if self.menu is not MenuItem.PETS:
                self.menu = MenuItem.PETS
                self.cursor = 0 if len(self.store) else None
        elif self.menu is MenuItem.PETS:
            self._on_pets_key(key)

    def _on_pets_key(self, key: str) -> None:
        if key in KEYS["down"]:
            if self.cursor is not None:
                self.cursor = min(self.cursor + 1, len(self.store) - 1)
        elif key in KEYS["up"]:
            if self.cursor is not None:
                self.cursor = max(self.cursor - 1, 0)
        elif key in KEYS["delete"]:
            self._delete_selected()
        elif key in KEYS["add"]:
            self.form = PetForm()

    def _on_form_key(self, key: str) -> None:
        form = self.form
        if key in FORM_KEYS["confirm"]:
            self._submit_form()
        elif key in FORM_KEYS["cancel"]:
            self.form = None
        elif key in FORM_KEYS["erase"]:
            form.erase()
        elif key in FORM_KEYS["next"]:
            form.next_field()
        elif key in FORM_KEYS["prev"]:
            form.prev_field()
        elif len(key) == 1 and key.isprintable():
            form.type_char(key)

    # -- Store calls --

    def _delete_selected(self) -> None:
        if self.cursor is None:
            return
        record = self.store.records[self.cursor]
        try:
            self.store.delete(record.id)
        except WriteError as exc:
            self._notify(f"Could not delete pet #{record.id}: {exc}", kind="error")
            return
        self._clamp_cursor()
        self._notify(f"Deleted pet #{record.id} ({record.name})")

    def _submit_form(self) -> None:
        try:
            name, category, age = self.form.values()
        except FormError as exc:
            self._notify(str(exc), kind="error")
            return
        try:
            record = self.store.create(name, category, age)
        except WriteError as exc:
            self._notify(f"Could not add {name}: {exc}", kind="error")
            return
        self.form = None
        self.cursor = self.store.index_of(record.id)
        self._notify(f"Added pet #{record.id} ({record.name})")

    # -- Helpers --

    def _clamp_cursor(self) -> None:
        size = len(self.store)
        if size == 0:
            self.cursor = None
        elif self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = min(self.cursor, size - 1)

    def _notify(self, text: str, kind: str = "info") -> None:
        if kind == "error":
            pet_log(f"ERROR: {text}")
        self.message = StatusMessage(text, kind)
        self._message_ttl = self.message_ticks
