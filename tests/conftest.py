import pytest

from shoppable.storage import reset_settings_store


@pytest.fixture(autouse=True)
def _reset_settings_store():
    """Each test starts without a process-wide settings store."""
    reset_settings_store()
    yield
    reset_settings_store()
