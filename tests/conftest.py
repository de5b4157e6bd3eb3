import pytest

from winstats.config import reset_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from the built-in defaults, whatever the environment says."""
    reset_settings({})
    yield
    reset_settings({})
