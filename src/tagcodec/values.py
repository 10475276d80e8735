"""
Value Kinds Outside Plain JSON

Python has no native counterpart for two of the value kinds the codec
carries: the undefined value (distinct from None, which is JSON null) and a
regular expression that keeps its literal flags. Both are defined here,
along with the integer range that plain JSON numbers can hold exactly.
"""

from __future__ import annotations
from dataclasses import dataclass
import re
from typing import Dict, Optional

from .errors import MalformedPayloadError


# =============================================================================
# NUMERIC RANGE
# =============================================================================

# Largest integer an IEEE 754 double holds exactly (2**53 - 1).
# Integers beyond it are carried as "bigint".
MAX_SAFE_INTEGER: int = 2**53 - 1


# =============================================================================
# UNDEFINED
# =============================================================================

class Undefined:
    """
    The absent value.

    A singleton: Undefined() always returns UNDEFINED. It is falsy and is
    not equal to None.
    """

    _instance: Optional['Undefined'] = None

    def __new__(cls) -> 'Undefined':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'undefined'

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> 'Undefined':
        return self

    def __deepcopy__(self, memo: dict) -> 'Undefined':
        return self

    def __reduce__(self) -> str:
        return 'UNDEFINED'


UNDEFINED = Undefined()


# =============================================================================
# REGULAR EXPRESSIONS
# =============================================================================

# Letters that compile to a Python flag.
_FLAG_TO_RE: Dict[str, int] = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'a': re.ASCII,
}

# Letters accepted in a literal but with no effect on compile():
# g/y/d are matching modes, u/v are implied for str patterns.
_NO_OP_FLAGS = frozenset('dguvy')

VALID_FLAGS = frozenset(_FLAG_TO_RE) | _NO_OP_FLAGS


@dataclass(frozen=True)
class RegExp:
    """
    A regular expression literal: pattern source plus flag letters.

    str(RegExp('ab+c', 'gi')) == '/ab+c/gi'. Flags are kept sorted so two
    literals with the same flags in a different order compare equal.
    """
    source: str
    flags: str = ''

    def __post_init__(self) -> None:
        seen = set()
        for flag in self.flags:
            if flag not in VALID_FLAGS:
                raise MalformedPayloadError('regexp', f"invalid flag {flag!r}")
            if flag in seen:
                raise MalformedPayloadError('regexp', f"repeated flag {flag!r}")
            seen.add(flag)
        object.__setattr__(self, 'flags', ''.join(sorted(self.flags)))

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"

    def compile(self) -> 're.Pattern[str]':
        """
        Compile to a re.Pattern, applying the flags Python supports.

        The source is kept as written, so JavaScript-only syntax such as
        (?<name>...) or \\p{L} is carried fine but fails here.
        """
        re_flags = 0
        for flag in self.flags:
            re_flags |= _FLAG_TO_RE.get(flag, 0)
        try:
            return re.compile(self.source, re_flags)
        except re.error as exc:
            raise MalformedPayloadError('regexp', str(exc)) from exc

    @classmethod
    def from_literal(cls, text: str) -> 'RegExp':
        """
        Parse '/source/flags'.

        The source is everything between the first character and the last
        '/', so slashes inside the source need no escaping.
        """
        if not isinstance(text, str):
            raise MalformedPayloadError('regexp', f"expected str, got {type(text).__name__}")
        last = text.rfind('/')
        if not text.startswith('/') or last < 1:
            raise MalformedPayloadError('regexp', f"not a /source/flags literal: {text!r}")
        return cls(text[1:last], text[last + 1:])

    @classmethod
    def from_pattern(cls, pattern: 're.Pattern[str]') -> 'RegExp':
        """Convert a compiled str pattern, translating its Python flags."""
        flags = ''.join(
            letter for letter, bit in _FLAG_TO_RE.items()
            if pattern.flags & bit
        )
        return cls(pattern.pattern, flags)
