import copy
import os
import sys
import tempfile

import pytest

# Add the project src directory to PYTHONPATH for tests
CURRENT_DIR = os.path.dirname(__file__)
SRC_PATH = os.path.abspath(os.path.join(CURRENT_DIR, "..", "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from hotelkeeper.exceptions import SaveError, StateNotFoundError  # noqa: E402
from hotelkeeper.models import HotelState  # noqa: E402


def make_db_url(tmpdir: str) -> str:
    """Create a database URL for testing."""
    db_path = os.path.join(tmpdir, "hotelkeeper_test.db")
    return f"sqlite:///{db_path}"


class CountingStore:
    """In-memory store that keeps a snapshot of every save and can be told to fail."""

    def __init__(self, state=None):
        self.saved = state
        self.save_calls = 0
        self.fail_saves = False

    def exists(self) -> bool:
        return self.saved is not None

    def load(self) -> HotelState:
        if self.saved is None:
            raise StateNotFoundError("nothing saved")
        return copy.deepcopy(self.saved)

    def save(self, state: HotelState) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise SaveError("disk full")
        self.saved = copy.deepcopy(state)


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as td:
        yield td


@pytest.fixture
def db_url(tmp_dir):
    return make_db_url(tmp_dir)


@pytest.fixture
def counting_store():
    return CountingStore()
