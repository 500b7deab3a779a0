import os
import time

# Must be set before the settings object is created
os.environ["STORAGE_BACKEND"] = "memory"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cost_manager.db.memory import MemoryDocumentStore  # noqa: E402
from cost_manager.db.store import get_store  # noqa: E402
from cost_manager.main import app  # noqa: E402


@pytest.fixture()
def store():
    return MemoryDocumentStore()


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def new_york_time():
    """Run the test with the process local time zone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()
