"""
tagcodec: Round-trip Rich Python Values Through Plain JSON

Plain JSON carries str, numbers, bool, null, lists and str-keyed objects.
tagcodec classifies the values it cannot carry (big integers, datetimes,
NaN and the infinities, undefined, regexes, sets, non-str-keyed mappings)
into a plain payload plus a type annotation, and rebuilds them from that
pair.

Usage:
    from tagcodec import transform_value, untransform_value

    result = transform_value(123456789012345678901234567890)
    # TransformResult(value='123456789012345678901234567890', type=<TypeAnnotation.BIGINT: 'bigint'>)

    untransform_value(result.value, result.type)
    # 123456789012345678901234567890

    # Annotations are plain strings on the wire
    untransform_value("/ab+c/gi", "regexp")
    # RegExp(source='ab+c', flags='gi')
"""

# Vocabulary
from .annotations import (
    TypeAnnotation,
    PRIMITIVE_TYPE_ANNOTATIONS,
    ALL_TYPE_ANNOTATIONS,
    is_primitive_type_annotation,
    is_type_annotation,
)

# Values
from .values import UNDEFINED, Undefined, RegExp, MAX_SAFE_INTEGER

# Errors
from .errors import (
    TransformError,
    UnsupportedKeyTypeError,
    MalformedPayloadError,
    UnknownTypeAnnotationError,
)

# Transformer
from .transformer import (
    ValueTransformer,
    TransformResult,
    transform_value,
    untransform_value,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Vocabulary
    "TypeAnnotation",
    "PRIMITIVE_TYPE_ANNOTATIONS",
    "ALL_TYPE_ANNOTATIONS",
    "is_primitive_type_annotation",
    "is_type_annotation",
    # Values
    "UNDEFINED",
    "Undefined",
    "RegExp",
    "MAX_SAFE_INTEGER",
    # Errors
    "TransformError",
    "UnsupportedKeyTypeError",
    "MalformedPayloadError",
    "UnknownTypeAnnotationError",
    # Transformer
    "ValueTransformer",
    "TransformResult",
    "transform_value",
    "untransform_value",
]
