# Ensure project root is on sys.path so 'tmi_mock' and 'tests' are importable when
# running pytest from environments that don't automatically include it.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def reset_error_counts():
    """Start every test with empty error counts."""
    yield
    from tmi_mock.logging_config import error_counts

    error_counts.reset()
