import pytest

from library import Library
from ui_helpers import OUTPUT_MODE_ENV

@pytest.fixture
def lib():
    # Every test gets its own empty in-memory catalog
    yield Library()

@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # --output writes to the environment; keep modes from leaking between tests
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
