import time

import pytest


@pytest.fixture
def berlin_tz(monkeypatch):
    """Run the test with the process local zone set to Europe/Berlin."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
