"""
Configuration values for pet-cli.
"""
APP_NAME = "pet-CLI"
COPYRIGHT = f"{APP_NAME} 2020 - all rights reserved"

# Render/refresh cadence and input-poll granularity
DEFAULT_TICK_MS = 200
TICK_INTERVAL = DEFAULT_TICK_MS / 1000

# Status messages disappear after this many ticks (3s at 200ms)
MESSAGE_TICKS = 15

# Tab bar titles, in display order
MENU_TITLES = ["Home", "Pets", "Add", "Delete", "Quit"]

# =============================================================================
# KEY BINDINGS
# Outside the add form only (except force_quit); inside it printable keys are text.
# =============================================================================

KEYS = {
    "quit": {"q"},
    # Also inside the add form; some terminals eat ^Q for flow control
    "force_quit": {"ctrl+q", "ctrl+x"},
    "home": {"h"},
    "pets": {"p"},
    "add": {"a"},
    "delete": {"d"},
    "down": {"down", "j"},
    "up": {"up", "k"},
}

FORM_KEYS = {
    "confirm": {"enter"},
    "cancel": {"esc"},
    "erase": {"backspace", "delete"},
    "next": {"tab", "down"},
    "prev": {"up"},
}
