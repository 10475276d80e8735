"""
Type tests for the value kinds the transformer recognizes.

bool is a subclass of int in Python, so every numeric test rules it out
first.
"""

from __future__ import annotations
from collections.abc import Mapping, Set
from datetime import datetime
import math
import re
from typing import Any

from .values import MAX_SAFE_INTEGER, RegExp, Undefined


def is_undefined(value: Any) -> bool:
    return isinstance(value, Undefined)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bigint(value: Any, limit: int = MAX_SAFE_INTEGER) -> bool:
    """An int too large in magnitude for a JSON number to hold exactly."""
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) > limit


def is_number(value: Any, limit: int = MAX_SAFE_INTEGER) -> bool:
    """A float, or an int within the exactly representable range."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return True
    return isinstance(value, int) and abs(value) <= limit


def is_nan_value(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_infinite(value: Any) -> bool:
    return isinstance(value, float) and math.isinf(value)


def is_date(value: Any) -> bool:
    return isinstance(value, datetime)


def is_set(value: Any) -> bool:
    return isinstance(value, Set)


def is_regexp(value: Any) -> bool:
    """A RegExp literal, or a compiled pattern over str."""
    if isinstance(value, RegExp):
        return True
    return isinstance(value, re.Pattern) and isinstance(value.pattern, str)


def is_map(value: Any) -> bool:
    return isinstance(value, Mapping)
