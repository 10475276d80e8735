"""
Value Transformer

transform:   value -> (plain payload, type annotation) | None
untransform: (plain payload, type annotation) -> value

The two directions agree on every annotation in TypeAnnotation. A None
result from transform means the value is already plain data and the
caller keeps it as is. Nested values are never visited: the caller walks
documents and calls these functions on each position it cares about.
"""

from __future__ import annotations
from datetime import datetime, timezone
from decimal import Decimal
import logging
import re
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from ordered_set import OrderedSet

from .annotations import TypeAnnotation, is_type_annotation, to_type_annotation
from .errors import MalformedPayloadError, UnknownTypeAnnotationError, UnsupportedKeyTypeError
from .predicates import (
    is_bigint,
    is_boolean,
    is_date,
    is_infinite,
    is_map,
    is_nan_value,
    is_number,
    is_regexp,
    is_set,
    is_string,
    is_undefined,
)
from .values import MAX_SAFE_INTEGER, UNDEFINED, RegExp

logger = logging.getLogger(__name__)

_INTEGER_LITERAL = re.compile(r'[+-]?[0-9]+')
_EPOCH = datetime(1970, 1, 1)
_NO_KEY = object()


# =============================================================================
# RESULT
# =============================================================================

class TransformResult(NamedTuple):
    """A plain-data payload and the annotation needed to rebuild the value."""
    value: Any
    type: TypeAnnotation

    def as_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'type': self.type.value}


# =============================================================================
# TRANSFORMER
# =============================================================================

class ValueTransformer:
    """
    Classifies values into type annotations and rebuilds them.

    Usage:
        transformer = ValueTransformer()
        result = transformer.transform(float('inf'))
        # TransformResult(value=None, type=TypeAnnotation.INFINITY)
        transformer.untransform(result.value, result.type)
        # inf

        # Reject annotations outside the vocabulary
        strict = ValueTransformer(strict=True)
    """

    DEFAULT_STRICT = False
    DEFAULT_TRUTHY_BOOLEAN_KEYS = False
    DEFAULT_SAFE_INTEGER_LIMIT = MAX_SAFE_INTEGER

    def __init__(
        self,
        strict: bool = DEFAULT_STRICT,
        truthy_boolean_keys: bool = DEFAULT_TRUTHY_BOOLEAN_KEYS,
        safe_integer_limit: int = DEFAULT_SAFE_INTEGER_LIMIT
    ):
        """
        Args:
            strict: Raise UnknownTypeAnnotationError on an annotation outside
                the vocabulary instead of returning the payload unchanged
            truthy_boolean_keys: Decode map:boolean keys by truthiness (any
                non-empty string is True) instead of by "true"/"false"
            safe_integer_limit: Largest magnitude carried as a plain number;
                ints beyond it are transformed as bigint
        """
        self.strict = strict
        self.truthy_boolean_keys = truthy_boolean_keys
        self.safe_integer_limit = safe_integer_limit

    # -------------------------------------------------------------------------
    # Forward
    # -------------------------------------------------------------------------

    def transform(self, value: Any) -> Optional[TransformResult]:
        """
        Classify value and return its payload and annotation.

        The order of the tests matters: NaN is checked before infinity, and
        sets and regexes before mappings.

        Raises:
            UnsupportedKeyTypeError: value is a mapping whose first key is
                not a str, number, bigint or bool
        """
        if is_undefined(value):
            return TransformResult(None, TypeAnnotation.UNDEFINED)

        elif is_bigint(value, self.safe_integer_limit):
            return TransformResult(_format_integer(value), TypeAnnotation.BIGINT)

        elif is_date(value):
            return TransformResult(_format_timestamp(value), TypeAnnotation.DATE)

        elif is_nan_value(value):
            return TransformResult(None, TypeAnnotation.NAN)

        elif is_infinite(value):
            annotation = TypeAnnotation.INFINITY if value > 0 else TypeAnnotation.NEGATIVE_INFINITY
            return TransformResult(None, annotation)

        elif is_set(value):
            return TransformResult(list(value), TypeAnnotation.SET)

        elif is_regexp(value):
            regexp = value if isinstance(value, RegExp) else RegExp.from_pattern(value)
            return TransformResult(str(regexp), TypeAnnotation.REGEXP)

        elif is_map(value):
            return TransformResult(value, self._map_annotation(value))

        return None

    def _map_annotation(self, value: Any) -> TypeAnnotation:
        """
        Infer the key type from the first key only.

        Mixed-key mappings are classified by whichever key comes first.
        """
        first_key = next(iter(value), _NO_KEY)

        if first_key is _NO_KEY or is_string(first_key):
            return TypeAnnotation.MAP_STRING

        logger.debug("Inferring map key type from sampled key %r", first_key)

        if is_number(first_key, self.safe_integer_limit):
            return TypeAnnotation.MAP_NUMBER

        if is_bigint(first_key, self.safe_integer_limit):
            return TypeAnnotation.MAP_BIGINT

        if is_boolean(first_key):
            return TypeAnnotation.MAP_BOOLEAN

        raise UnsupportedKeyTypeError(first_key)

    # -------------------------------------------------------------------------
    # Inverse
    # -------------------------------------------------------------------------

    def untransform(self, payload: Any, annotation: Any) -> Any:
        """
        Rebuild the value a payload was produced from.

        Unknown annotations return the payload unchanged unless the
        transformer is strict.

        Raises:
            MalformedPayloadError: payload does not parse as the annotated kind
            UnknownTypeAnnotationError: strict mode and annotation unknown
        """
        if not is_type_annotation(annotation):
            if self.strict:
                raise UnknownTypeAnnotationError(annotation)
            logger.debug("Passing payload through for unknown annotation %r", annotation)
            return payload

        annotation = to_type_annotation(annotation)

        if annotation == TypeAnnotation.BIGINT:
            return _parse_integer(payload, annotation)

        elif annotation == TypeAnnotation.UNDEFINED:
            return UNDEFINED

        elif annotation == TypeAnnotation.DATE:
            return _parse_timestamp(payload)

        elif annotation == TypeAnnotation.NAN:
            return float('nan')

        elif annotation == TypeAnnotation.INFINITY:
            return float('inf')

        elif annotation == TypeAnnotation.NEGATIVE_INFINITY:
            return float('-inf')

        elif annotation == TypeAnnotation.MAP_NUMBER:
            return {_parse_number_key(k): v for k, v in _entries(payload, annotation)}

        elif annotation == TypeAnnotation.MAP_STRING:
            return dict(_entries(payload, annotation))

        elif annotation == TypeAnnotation.MAP_BOOLEAN:
            return {self._parse_boolean_key(k): v for k, v in _entries(payload, annotation)}

        elif annotation == TypeAnnotation.MAP_BIGINT:
            return {_parse_integer(k, annotation): v for k, v in _entries(payload, annotation)}

        elif annotation == TypeAnnotation.SET:
            return _build_set(payload)

        elif annotation == TypeAnnotation.REGEXP:
            return RegExp.from_literal(payload)

        return payload

    def _parse_boolean_key(self, key: Any) -> bool:
        if isinstance(key, bool):
            return key
        if self.truthy_boolean_keys:
            return bool(key)
        if key in ('true', 'True'):
            return True
        if key in ('false', 'False'):
            return False
        raise MalformedPayloadError(TypeAnnotation.MAP_BOOLEAN.value, f"not a boolean key: {key!r}")


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================

def _format_timestamp(value: datetime) -> str:
    """
    ISO 8601 in UTC with millisecond precision: 2024-01-01T00:00:00.000Z

    The UTC fields are computed from the offset from the epoch, so an
    offset that pushes the instant outside years 1..9999 still formats.
    Such years use the extended form: +010000-01-01T04:00:00.000Z
    """
    elapsed = value.replace(tzinfo=None) - _EPOCH
    offset = value.utcoffset()
    if offset is not None:
        elapsed -= offset
    year, month, day = _civil_from_days(elapsed.days)
    hour, rest = divmod(elapsed.seconds, 3600)
    minute, second = divmod(rest, 60)
    year_text = f"{year:04d}" if 0 <= year <= 9999 else f"{year:+07d}"
    return (
        f"{year_text}-{month:02d}-{day:02d}"
        f"T{hour:02d}:{minute:02d}:{second:02d}"
        f".{elapsed.microseconds // 1000:03d}Z"
    )


def _civil_from_days(days: int) -> Tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for days since 1970-01-01."""
    # Eras of 400 years, each year counted from March 1.
    days += 719468
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def _parse_timestamp(payload: Any) -> datetime:
    """Parse an ISO 8601 string into an aware UTC datetime."""
    annotation = TypeAnnotation.DATE.value
    if not isinstance(payload, str):
        raise MalformedPayloadError(annotation, f"expected str, got {type(payload).__name__}")
    text = payload.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedPayloadError(annotation, f"{payload!r}: {exc}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _format_integer(value: int) -> str:
    """Decimal digits of value; Decimal has no int-to-str digit limit."""
    return str(Decimal(value))


def _parse_integer(payload: Any, annotation: TypeAnnotation) -> int:
    if isinstance(payload, int) and not isinstance(payload, bool):
        return payload
    if isinstance(payload, str) and _INTEGER_LITERAL.fullmatch(payload.strip()):
        return int(Decimal(payload.strip()))
    raise MalformedPayloadError(annotation.value, f"not an integer literal: {payload!r}")


def _parse_number_key(key: Any) -> Any:
    """Integer literals become int, anything else float (incl. nan/inf)."""
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return key
    if isinstance(key, str):
        text = key.strip()
        if _INTEGER_LITERAL.fullmatch(text):
            return int(Decimal(text))
        # float() also takes '1_000' and non-ASCII digits
        if text.isascii() and '_' not in text:
            try:
                return float(text)
            except ValueError:
                pass
    raise MalformedPayloadError(TypeAnnotation.MAP_NUMBER.value, f"not a number key: {key!r}")


def _entries(payload: Any, annotation: TypeAnnotation) -> List[Tuple[Any, Any]]:
    """Key/value pairs from a mapping or an iterable of pairs."""
    if hasattr(payload, 'items'):
        return list(payload.items())
    if isinstance(payload, (str, bytes)):
        raise MalformedPayloadError(annotation.value, "expected a mapping or entry list")
    try:
        entries = list(payload)
    except TypeError as exc:
        raise MalformedPayloadError(annotation.value, f"expected a mapping or entry list: {exc}") from exc
    pairs = []
    for entry in entries:
        # A two-character string would otherwise unpack as a pair.
        if isinstance(entry, (str, bytes)):
            raise MalformedPayloadError(annotation.value, f"entry is not a pair: {entry!r}")
        try:
            key, value = entry
        except (TypeError, ValueError) as exc:
            raise MalformedPayloadError(annotation.value, f"entry is not a pair: {entry!r}") from exc
        pairs.append((key, value))
    return pairs


def _build_set(payload: Iterable[Any]) -> OrderedSet:
    """Elements in payload order, later duplicates dropped."""
    annotation = TypeAnnotation.SET.value
    if isinstance(payload, (str, bytes)):
        raise MalformedPayloadError(annotation, "expected a sequence of elements")
    try:
        return OrderedSet(payload)
    except TypeError as exc:
        raise MalformedPayloadError(annotation, str(exc)) from exc


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Default global instance
_default_transformer = ValueTransformer()


def transform_value(value: Any) -> Optional[TransformResult]:
    """Classify a value with default settings."""
    return _default_transformer.transform(value)


def untransform_value(payload: Any, annotation: Any) -> Any:
    """Rebuild a value with default settings."""
    return _default_transformer.untransform(payload, annotation)
