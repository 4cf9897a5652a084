"""Rendering: ViewModel -> rich renderables, drawn through rich.live.Live."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import APP_NAME, COPYRIGHT, MENU_TITLES
from .form import FIELD_LABELS, FIELDS, PetForm
from .menu import MenuItem
from .state import ViewModel

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def create_layout() -> Layout:
    """Create the three-row screen layout."""
    layout = Layout()
    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="body"),
        Layout(name="footer", size=3),
    )
    return layout


def build_screen(view: ViewModel) -> Layout:
    """Render a full frame. Pure: reads the view model, touches nothing else."""
    layout = create_layout()
    layout["header"].update(_render_tabs(view.menu))
    if view.menu is MenuItem.PETS:
        layout["body"].update(_render_pets(view))
    else:
        layout["body"].update(_render_home())
    layout["footer"].update(_render_footer(view))
    return layout


def _render_tabs(active: MenuItem) -> Panel:
    text = Text()
    for i, title in enumerate(MENU_TITLES):
        if i:
            text.append(" | ", style="white")
        highlighted = title == active.title
        text.append(title[0], style="bold yellow underline")
        text.append(title[1:], style="bold yellow" if highlighted else "white")
    return Panel(text, title="Menu", border_style="white")


def _render_home() -> Panel:
    text = Text(justify="center")
    text.append("\n\nWelcome\n\nto\n\n")
    text.append(APP_NAME, style="bold magenta")
    text.append("\n\n\n")
    text.append(
        "Press 'p' to access pets, 'a' to add a new pet and 'd' to delete "
        "the currently selected pet.\nPress 'h' to come back here and 'q' to quit."
    )
    return Panel(Align.center(text, vertical="middle"), title="Home", border_style="white")


def _render_pets(view: ViewModel) -> Layout:
    layout = Layout()
    layout.split_row(
        Layout(_render_pet_list(view), name="list", ratio=1),
        Layout(name="detail", ratio=3),
    )
    if view.form is not None:
        layout["detail"].update(_render_form(view.form))
    else:
        layout["detail"].update(_render_detail(view))
    return layout


def _render_pet_list(view: ViewModel) -> Panel:
    text = Text()
    if not view.records:
        text.append("No pets yet.\nPress 'a' to add one.", style="dim")
    for index, pet in enumerate(view.records):
        if index == view.cursor:
            text.append(f"> {pet.name}\n", style="bold black on yellow")
        else:
            text.append(f"  {pet.name}\n", style="white")
    return Panel(text, title="Pets", border_style="white")


def _render_detail(view: ViewModel) -> Panel:
    table = Table(expand=True)
    for header in ("ID", "Name", "Category", "Age", "Created At"):
        table.add_column(header, style="bold" if header == "Name" else None)
    pet = view.selected
    if pet is not None:
        table.add_row(
            str(pet.id),
            pet.name,
            pet.category,
            str(pet.age),
            pet.created_at.strftime(_TIMESTAMP_FORMAT),
        )
    return Panel(table, title="Detail", border_style="white")


def _render_form(form: PetForm) -> Panel:
    rows = []
    for index, name in enumerate(FIELDS):
        active = index == form.active
        line = Text()
        line.append("> " if active else "  ")
        line.append(f"{FIELD_LABELS[name]:<10}", style="bold cyan" if active else "cyan")
        line.append(getattr(form, name))
        if active:
            line.append("_", style="blink")
        rows.append(line)
    rows.append(Text("\nTab/Up/Down: switch field   Enter: save   Esc: cancel   Ctrl-X: quit", style="dim"))
    return Panel(Group(*rows), title="Add pet", border_style="cyan")


def _render_footer(view: ViewModel) -> Panel:
    message = view.message
    if message is None:
        text = Text(COPYRIGHT, style="cyan", justify="center")
    else:
        style = "bold red" if message.kind == "error" else "green"
        text = Text(message.text, style=style, justify="center")
    return Panel(text, title="Copyright" if message is None else "Status", border_style="white")


class LiveRenderer:
    """Draws view models into the alternate screen via ``rich.live.Live``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._live: Live | None = None

    def __enter__(self) -> LiveRenderer:
        self._live = Live(
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
        )
        self._live.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        live, self._live = self._live, None
        if live is not None:
            live.__exit__(exc_type, exc, tb)

    def draw(self, view: ViewModel) -> None:
        if self._live is None:
            raise RuntimeError("LiveRenderer.draw() called outside its context")
        self._live.update(build_screen(view), refresh=True)
