"""
pet-cli - Logging Module
Provides centralized logging functionality for the whole app.
"""
import os
import sys
from datetime import datetime

from .conf import LOG_FILE, PACKAGE_DIR

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG = os.environ.get("PETS_LOG", "1") != "0"  # Set to False to disable logging
LOG_TO_STDERR = False  # The terminal belongs to the UI while it runs
first_line = True
# =============================================================================
# LOGGING
# =============================================================================

def pet_log(message: str) -> None:
    """Append log message to pets.log if LOG is enabled."""
    global first_line
    if not LOG:
        return
    if first_line:
        first_line = False
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        pet_log("--- New pet-CLI Session ---")
        pet_log("Package folder: " + str(PACKAGE_DIR))
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_line = f"[{timestamp}] {message}\n"
    if LOG_TO_STDERR:
        sys.stderr.write(log_line)
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(log_line)

