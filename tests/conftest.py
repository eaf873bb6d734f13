import pytest

from configfile.registry import hub


@pytest.fixture(autouse=True)
def restore_enabled_formats():
    """Undo any ``hub.set_enabled`` performed by a test."""
    enabled = hub._enabled
    yield
    hub.set_enabled(enabled)
