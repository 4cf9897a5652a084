"""Menu selections."""

from enum import StrEnum


class MenuItem(StrEnum):
    HOME = "home"
    PETS = "pets"

    @property
    def title(self) -> str:
        return self.value.capitalize()
