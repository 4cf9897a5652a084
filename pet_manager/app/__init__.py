"""Application state machine and its rich renderer."""

from .form import FormError, PetForm
from .menu import MenuItem
from .render import LiveRenderer, build_screen
from .state import PetApp, StatusMessage, ViewModel
