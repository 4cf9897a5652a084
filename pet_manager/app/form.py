"""In-progress "add pet" form."""

from __future__ import annotations

from dataclasses import dataclass, replace

FIELDS = ("name", "category", "age")
FIELD_LABELS = {"name": "Name", "category": "Category", "age": "Age"}


class FormError(ValueError):
    """The form content cannot be turned into a pet."""


@dataclass
class PetForm:
    name: str = ""
    category: str = ""
    age: str = ""
    active: int = 0

    @property
    def active_field(self) -> str:
        return FIELDS[self.active]

    def type_char(self, ch: str) -> None:
        """Append a character to the active field."""
        setattr(self, self.active_field, getattr(self, self.active_field) + ch)

    def erase(self) -> None:
        setattr(self, self.active_field, getattr(self, self.active_field)[:-1])

    def next_field(self) -> None:
        self.active = (self.active + 1) % len(FIELDS)

    def prev_field(self) -> None:
        self.active = (self.active - 1) % len(FIELDS)

    def values(self) -> tuple[str, str, int]:
        """Validated ``(name, category, age)``. Raises ``FormError``."""
        name = self.name.strip()
        category = self.category.strip()
        if not name:
            raise FormError("Name is required")
        if not category:
            raise FormError("Category is required")
        age_text = self.age.strip()
        if not age_text.isdecimal():
            raise FormError("Age must be a whole number of years")
        return name, category, int(age_text)

    def snapshot(self) -> PetForm:
        return replace(self)
