"""Pytest fixtures shared by the pet-CLI tests."""

import pytest

from pet_manager import log
from pet_manager.fs_store import PetRecordList


@pytest.fixture(autouse=True)
def isolated_log(tmp_path, monkeypatch):
    """Send pets.log into the test's tmp dir instead of ~/.pets."""
    log_file = tmp_path / "logs" / "pets.log"
    monkeypatch.setattr(log, "LOG_FILE", log_file)
    monkeypatch.setattr(log, "LOG", True)
    monkeypatch.setattr(log, "first_line", True)
    yield log_file


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "db.json"


@pytest.fixture
def store(db_path):
    """A loaded, empty store backed by a file that does not exist yet."""
    s = PetRecordList(list_path=db_path)
    s.load()
    return s
