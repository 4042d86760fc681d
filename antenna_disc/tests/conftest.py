import pytest

from .helpers import ANT1_ROWS, WIDE_ROWS, CountingStore


@pytest.fixture
def store():
    return CountingStore({"ANT1": ANT1_ROWS, "WIDE": WIDE_ROWS})
