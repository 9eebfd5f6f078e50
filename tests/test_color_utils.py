from __future__ import annotations

import random
import re

import pytest

from tmi_mock.color import hsl_to_hex, random_chat_color

HEX = re.compile(r"^#[0-9a-f]{6}$")


@pytest.mark.parametrize(
    ("hsl", "expected"),
    [
        ((0, 100, 50), "#ff0000"),
        ((120, 100, 50), "#00ff00"),
        ((240, 100, 50), "#0000ff"),
        ((0, 0, 100), "#ffffff"),
        ((0, 0, 0), "#000000"),
    ],
)
def test_hsl_to_hex(hsl, expected):
    assert hsl_to_hex(*hsl) == expected


def test_random_chat_color_format():
    for _ in range(20):
        assert HEX.match(random_chat_color())


def test_random_chat_color_is_deterministic_with_seed():
    assert random_chat_color(random.Random(7)) == random_chat_color(random.Random(7))


def test_random_chat_color_avoids_excluded():
    first = random_chat_color(random.Random(7))
    assert random_chat_color(random.Random(7), exclude={first.upper()}) != first
