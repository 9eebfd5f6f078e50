"""Color helpers for mock chat users.

Provides:
 - random_chat_color: HSL-banded random ``#rrggbb`` colors
 - hsl_to_hex: the underlying conversion
"""

from .utils import hsl_to_hex, random_chat_color

__all__ = ["hsl_to_hex", "random_chat_color"]
