"""
Type Annotation Vocabulary

The closed set of tags written alongside a transformed payload. Primitive
annotations identify values that carry no payload worth preserving; the
rest require the payload to rebuild the original value.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, FrozenSet


# =============================================================================
# ANNOTATION REGISTRY
# =============================================================================

class TypeAnnotation(str, Enum):
    """
    Type annotations written next to transformed values.

    Members are str subclasses so they compare and hash like their wire
    strings: TypeAnnotation.DATE == "Date".
    """
    # Primitives
    NAN = "NaN"
    INFINITY = "Infinity"
    NEGATIVE_INFINITY = "-Infinity"
    UNDEFINED = "undefined"
    BIGINT = "bigint"

    # Leaves
    REGEXP = "regexp"
    DATE = "Date"

    # Containers
    MAP_NUMBER = "map:number"
    MAP_STRING = "map:string"
    MAP_BIGINT = "map:bigint"
    MAP_BOOLEAN = "map:boolean"
    SET = "set"

    def __str__(self) -> str:
        return self.value


PRIMITIVE_TYPE_ANNOTATIONS: FrozenSet[TypeAnnotation] = frozenset({
    TypeAnnotation.NEGATIVE_INFINITY,
    TypeAnnotation.INFINITY,
    TypeAnnotation.UNDEFINED,
    TypeAnnotation.NAN,
    TypeAnnotation.BIGINT,
})

ALL_TYPE_ANNOTATIONS: FrozenSet[TypeAnnotation] = frozenset(TypeAnnotation)

# Membership is tested on the wire strings.
_PRIMITIVE_VALUES = frozenset(a.value for a in PRIMITIVE_TYPE_ANNOTATIONS)
_ALL_VALUES = frozenset(a.value for a in ALL_TYPE_ANNOTATIONS)


def is_primitive_type_annotation(value: Any) -> bool:
    """True iff value names one of the five primitive annotations."""
    return isinstance(value, str) and str(value) in _PRIMITIVE_VALUES


def is_type_annotation(value: Any) -> bool:
    """True iff value names any annotation in the closed vocabulary."""
    return isinstance(value, str) and str(value) in _ALL_VALUES


def to_type_annotation(value: Any) -> TypeAnnotation:
    """Return the TypeAnnotation member named by value (ValueError if none)."""
    return TypeAnnotation(str(value))
