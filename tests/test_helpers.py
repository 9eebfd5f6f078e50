import pytest

from tmi_mock.utils.helpers import format_duration


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (None, "unknown"),
        (0, "0s"),
        (59, "59s"),
        (65, "1m 5s"),
        (3605, "1h 0m 5s"),
        (90061, "1d 1h 1m 1s"),
        (12.9, "12s"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
