"""A write-through collection of PetRecords backed by a single JSON document."""

from __future__ import annotations

import contextlib
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from ..conf import DEFAULT_DB_PATH
from ..log import pet_log
from .errors import ParseError, ReadError, WriteError
from .pet_record import PetRecord, utc_now

_PETS_KEY = "pets"
_NEXT_ID_KEY = "next_id"


@dataclass
class PetRecordList:
    """Ordered pet collection persisted to one JSON file.

    The file holds ``{"next_id": <int>, "pets": [<record>, ...]}``.  A bare
    JSON array of records (the old ``db.json`` format) is also accepted on
    read and upgraded on the next write.

    Every mutation rewrites the whole file before returning (write-through).
    If the write fails the in-memory change is undone and ``WriteError`` is
    raised, so memory and disk never disagree after a call returns.

    Ids come from ``next_id``, a high-water mark that only grows, so an id
    is never handed out twice even after the newest record is deleted.
    """

    list_path: Path = field(default=DEFAULT_DB_PATH)
    _records: list[PetRecord] = field(default_factory=list, init=False, repr=False)
    _next_id: int = field(default=0, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self.list_path = Path(self.list_path)

    # -- Persistence --

    def load(self) -> list[PetRecord]:
        """Read all records from disk into memory.

        A missing file is an empty collection. Raises ``ReadError`` when the
        file exists but cannot be read and ``ParseError`` when its content is
        not a valid pet document.
        """
        if not self.list_path.exists():
            pet_log(f"No pet file at {self.list_path}, starting empty")
            records: list[PetRecord] = []
            next_id = 0
        else:
            try:
                raw = self.list_path.read_bytes()
            except OSError as exc:
                pet_log(f"ERROR: cannot read {self.list_path}: {exc}")
                raise ReadError(self.list_path, exc) from exc
            records, next_id = self._parse(raw)
            pet_log(f"Loaded {len(records)} pets from {self.list_path}")
        self._records = records
        self._next_id = next_id
        self._loaded = True
        return list(self._records)

    def save(self) -> None:
        """Atomically rewrite the backing file with the full record set.

        Content goes to a ``.tmp`` sibling first and is then renamed over the
        real file, so a failed write leaves the previous file untouched.
        """
        payload = json.dumps(self._to_document(), indent=2, ensure_ascii=False) + "\n"
        tmp_path = self.list_path.with_name(self.list_path.name + ".tmp")
        try:
            self.list_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.list_path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise WriteError(self.list_path, exc) from exc

    # -- CRUD --

    def create(self, name: str, category: str, age: int) -> PetRecord:
        """Add a new pet and persist it. Returns the stored record."""
        self._ensure_loaded()
        record = PetRecord(
            id=self._next_id,
            name=name,
            category=category,
            age=age,
            created_at=utc_now(),
        )
        self._records.append(record)
        self._next_id += 1
        try:
            self.save()
        except WriteError as exc:
            self._records.pop()
            self._next_id -= 1
            pet_log(f"ERROR: create of pet #{record.id} rolled back: {exc}")
            raise
        pet_log(f"Created pet #{record.id} ({record.name})")
        return record

    def get(self, pet_id: int) -> PetRecord | None:
        """Look up a pet by id."""
        self._ensure_loaded()
        index = self.index_of(pet_id)
        return None if index is None else self._records[index]

    def delete(self, pet_id: int) -> bool:
        """Remove a pet by id. Returns True if found and removed.

        Deleting an unknown id is a no-op: nothing is written and False is
        returned.
        """
        self._ensure_loaded()
        index = self.index_of(pet_id)
        if index is None:
            pet_log(f"WARN: delete of unknown pet #{pet_id} ignored")
            return False
        record = self._records.pop(index)
        try:
            self.save()
        except WriteError as exc:
            self._records.insert(index, record)
            pet_log(f"ERROR: delete of pet #{pet_id} rolled back: {exc}")
            raise
        pet_log(f"Deleted pet #{record.id} ({record.name})")
        return True

    def index_of(self, pet_id: int) -> int | None:
        """Position of a pet in display order, or None."""
        self._ensure_loaded()
        for i, r in enumerate(self._records):
            if r.id == pet_id:
                return i
        return None

    # -- Collection access --

    @property
    def records(self) -> list[PetRecord]:
        self._ensure_loaded()
        return list(self._records)

    @property
    def next_id(self) -> int:
        """The id the next ``create`` will assign."""
        self._ensure_loaded()
        return self._next_id

    def list(self) -> list[PetRecord]:
        """Current records in insertion order (a copy)."""
        return self.records

    def __iter__(self) -> Iterator[PetRecord]:
        self._ensure_loaded()
        return iter(list(self._records))

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    # -- Internals --

    def _parse(self, raw: bytes) -> tuple[list[PetRecord], int]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            pet_log(f"ERROR: cannot parse {self.list_path}: {exc}")
            raise ParseError(self.list_path, exc) from exc

        stored_next_id = None
        if isinstance(data, list):
            raw_pets = data
        elif isinstance(data, dict) and isinstance(data.get(_PETS_KEY), list):
            raw_pets = data[_PETS_KEY]
            stored_next_id = data.get(_NEXT_ID_KEY)
        else:
            self._fail_parse("expected a list of pets or an object with a 'pets' list")

        try:
            records = [PetRecord.from_dict(item) for item in raw_pets]
        except ValidationError as exc:
            pet_log(f"ERROR: invalid pet in {self.list_path}: {exc}")
            raise ParseError(self.list_path, exc) from exc

        seen: set[int] = set()
        for r in records:
            if r.id in seen:
                self._fail_parse(f"duplicate pet id {r.id}")
            seen.add(r.id)

        next_id = max(seen) + 1 if seen else 0
        if stored_next_id is not None:
            if isinstance(stored_next_id, bool) or not isinstance(stored_next_id, int) or stored_next_id < 0:
                self._fail_parse(f"'{_NEXT_ID_KEY}' must be a non-negative integer")
            next_id = max(next_id, stored_next_id)
        return records, next_id

    def _fail_parse(self, reason: str):
        exc = ValueError(reason)
        pet_log(f"ERROR: cannot parse {self.list_path}: {reason}")
        raise ParseError(self.list_path, exc) from exc

    def _to_document(self) -> dict:
        return {
            _NEXT_ID_KEY: self._next_id,
            _PETS_KEY: [r.to_dict() for r in self._records],
        }

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()
