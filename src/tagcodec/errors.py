"""
Errors raised while transforming or reconstructing values.

Each class also derives from the built-in exception callers would expect
(TypeError for an unsupported key, ValueError for a bad payload), so code
that already catches the built-ins keeps working.
"""

from __future__ import annotations

from typing import Any


class TransformError(Exception):
    """Base class for all tagcodec errors."""


class UnsupportedKeyTypeError(TransformError, TypeError):
    """A mapping's sampled key is not str, number, bigint or bool."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Key type not supported: {type(key).__name__}")
        self.key = key


class MalformedPayloadError(TransformError, ValueError):
    """A payload does not match the textual form its annotation requires."""

    def __init__(self, annotation: str, msg: str) -> None:
        super().__init__(f"Malformed {annotation} payload: {msg}")
        self.annotation = annotation


class UnknownTypeAnnotationError(TransformError, ValueError):
    """Raised in strict mode for an annotation outside the vocabulary."""

    def __init__(self, annotation: Any) -> None:
        super().__init__(f"Unknown type annotation: {annotation!r}")
        self.annotation = annotation
