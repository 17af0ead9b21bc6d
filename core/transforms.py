"""
Our Corner - Transform Helpers
==============================

Pure coercion and clamping rules for canvas item transforms.

Request values arrive as strings (form posts), numbers (JSON) or not at all.
Every helper here turns such a raw value into something safe to store,
falling back to a default instead of raising. Only a missing item key is a
hard failure, and that is decided by the engine, not here.
"""

import math
import re

# Domain bounds for a placed item
POSITION_MIN, POSITION_MAX = 0.0, 100.0
HEIGHT_MIN, HEIGHT_MAX = 0, 20
SCALE_MIN, SCALE_MAX = 0.25, 2.0
LAYER_MIN, LAYER_MAX = -1000, 1000
TILT_MIN, TILT_MAX = -60.0, 60.0
FULL_TURN = 360

COLOR_MAX = 0xFFFFFF

_HEX_COLOR = re.compile(r'^#?([0-9a-fA-F]{6})$')
_PREFIXED_HEX_COLOR = re.compile(r'^0[xX]([0-9a-fA-F]{1,6})$')
_DECIMAL = re.compile(r'^[0-9]+$')

_TRUTHY_WORDS = {'true', 'on', 'yes'}


def clamp(value, low, high):
    """Constrain value to the closed interval [low, high]."""
    return max(low, min(high, value))


def coerce_number(value, default=0.0):
    """
    Read a finite float out of a raw request value.

    None, empty strings, unparseable text, NaN, infinities and integers too
    large for a float all come back as ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def round_half_up(value):
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def normalize_rotation(degrees):
    """Whole degrees in [0, 360)."""
    return round_half_up(degrees) % FULL_TURN


def clamp_position(value):
    return clamp(value, POSITION_MIN, POSITION_MAX)


def clamp_height(value):
    return int(clamp(round_half_up(value), HEIGHT_MIN, HEIGHT_MAX))


def clamp_scale(value):
    return clamp(value, SCALE_MIN, SCALE_MAX)


def clamp_layer(value):
    return int(clamp(round_half_up(value), LAYER_MIN, LAYER_MAX))


def clamp_tilt(value):
    return clamp(value, TILT_MIN, TILT_MAX)


def direction_of(value):
    """The sign (-1, 0 or 1) of a requested restack delta."""
    number = coerce_number(value, 0.0)
    if number > 0:
        return 1
    if number < 0:
        return -1
    return 0


def coerce_flag(value):
    """
    Truthiness of a flip flag.

    Numbers are truthy when non-zero. Strings are truthy when they hold a
    non-zero number or one of the checkbox words ("on", "true", "yes").
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUTHY_WORDS:
        return True
    return coerce_number(value, 0.0) != 0


def parse_color(value):
    """
    Parse a 24-bit RGB color.

    Accepts "#RRGGBB", "RRGGBB", "0xRRGGBB", decimal strings and integers
    (or integral floats) within 0..0xFFFFFF. Everything else, including
    NaN and infinities, is None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        match = _HEX_COLOR.match(text) or _PREFIXED_HEX_COLOR.match(text)
        if match:
            return int(match.group(1), 16)
        if not _DECIMAL.match(text):
            return None
        number = int(text)
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        number = int(value)
    else:
        return None

    if 0 <= number <= COLOR_MAX:
        return number
    return None


def color_to_hex(color):
    """Render a stored color as "#RRGGBB" (or None when absent)."""
    if color is None:
        return None
    return f'#{color:06X}'
