import sys
from datetime import datetime

import pytest

from errlog import sink

FIXED_TIME = datetime(2025, 3, 6, 12, 34, 56)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture(autouse=True)
def _restore_stderr():
    original = sys.stderr
    yield
    sink.unbind()
    sys.stderr = original
