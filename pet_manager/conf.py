"""pet-cli - Central path configuration."""

import os
from pathlib import Path

USER_HOME = Path.home()
PETS_HOME = Path(os.environ.get("PETS_HOME", USER_HOME / ".pets"))

PACKAGE_DIR = Path(__file__).parent.resolve()

LOG_FILE = PETS_HOME / "pets.log"

# Relative to the working directory, like the original ./data/db.json
DEFAULT_DB_PATH = Path(os.environ.get("PETS_DB_PATH", Path("data") / "db.json"))
