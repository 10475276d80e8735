"""
Property-Based Testing with Hypothesis

Generated inputs check that untransform inverts transform for every value
kind, both in memory and after the payload has been through JSON.
"""

import pytest
from hypothesis import given, strategies as st, settings
import json
import math
import re
from datetime import timezone

from tagcodec import (
    TypeAnnotation,
    UNDEFINED,
    RegExp,
    MAX_SAFE_INTEGER,
    is_type_annotation,
    transform_value,
    untransform_value,
)


# =============================================================================
# STRATEGIES
# =============================================================================

bigints = st.one_of(
    st.integers(min_value=MAX_SAFE_INTEGER + 1),
    st.integers(max_value=-MAX_SAFE_INTEGER - 1),
)

safe_ints = st.integers(min_value=-MAX_SAFE_INTEGER, max_value=MAX_SAFE_INTEGER)

utc_datetimes = st.datetimes(timezones=st.just(timezone.utc))

regexps = st.builds(
    RegExp,
    source=st.from_regex(r'[a-z0-9]{0,8}', fullmatch=True),
    flags=st.sets(st.sampled_from('dgimsuy')).map(''.join),
)

special_values = st.one_of(
    st.just(UNDEFINED),
    st.just(math.inf),
    st.just(-math.inf),
    bigints,
    utc_datetimes,
    regexps,
    st.sets(safe_ints, max_size=10),
    st.dictionaries(safe_ints, st.text(max_size=5), max_size=10),
    st.dictionaries(bigints, st.text(max_size=5), max_size=10),
    st.dictionaries(st.booleans(), st.text(max_size=5)),
)


def json_round_trip(value):
    result = transform_value(value)
    stored = json.loads(json.dumps(result.as_dict()))
    return untransform_value(stored['value'], stored['type'])


# =============================================================================
# PROPERTY: CLASSIFICATION
# =============================================================================

class TestClassification:
    """Every special value gets an annotation from the vocabulary."""

    @given(value=special_values)
    @settings(max_examples=300)
    def test_annotation_in_vocabulary(self, value):
        result = transform_value(value)
        assert result is not None
        assert is_type_annotation(result.type)

    @given(value=special_values)
    @settings(max_examples=300)
    def test_deterministic(self, value):
        assert transform_value(value) == transform_value(value)

    @given(value=st.one_of(
        st.none(),
        st.booleans(),
        safe_ints,
        st.floats(allow_nan=False, allow_infinity=False),
        st.text(),
        st.lists(st.integers(), max_size=5),
    ))
    def test_plain_values_untouched(self, value):
        assert transform_value(value) is None

    @given(value=st.sampled_from([float('nan'), -float('nan'), math.inf - math.inf]))
    def test_nan_never_misrouted(self, value):
        assert transform_value(value).type == TypeAnnotation.NAN


# =============================================================================
# PROPERTY: ROUND TRIP
# =============================================================================

class TestRoundTrip:
    """untransform(transform(v)) is observationally equal to v."""

    @given(value=bigints)
    def test_bigint(self, value):
        assert json_round_trip(value) == value

    @given(value=utc_datetimes)
    def test_timestamp_to_millisecond(self, value):
        expected = value.replace(microsecond=value.microsecond // 1000 * 1000)
        assert json_round_trip(value) == expected

    @given(value=regexps)
    def test_regexp(self, value):
        restored = json_round_trip(value)
        assert restored.source == value.source
        assert restored.flags == value.flags

    @given(value=st.sets(st.one_of(safe_ints, st.text(max_size=5)), max_size=10))
    def test_set(self, value):
        assert json_round_trip(value) == value

    @given(value=st.dictionaries(
        st.one_of(safe_ints, st.floats(allow_nan=False, allow_infinity=False)),
        st.integers(),
        min_size=1,
        max_size=10,
    ))
    def test_number_keyed_map(self, value):
        # int and float keys mix here; the first key decides the annotation.
        result = transform_value(value)
        assert result.type == TypeAnnotation.MAP_NUMBER
        assert json_round_trip(value) == value

    @given(value=st.dictionaries(bigints, st.integers(), min_size=1, max_size=10))
    def test_bigint_keyed_map(self, value):
        assert json_round_trip(value) == value

    @given(value=st.dictionaries(st.booleans(), st.integers(), min_size=1))
    def test_boolean_keyed_map(self, value):
        assert json_round_trip(value) == value

    @given(value=st.dictionaries(st.text(), st.integers()))
    def test_string_keyed_map(self, value):
        assert json_round_trip(value) == value

    @given(value=st.from_regex(r'[a-z]{1,6}', fullmatch=True), ignore=st.booleans())
    def test_compiled_pattern(self, value, ignore):
        pattern = re.compile(value, re.IGNORECASE if ignore else 0)
        restored = json_round_trip(pattern)
        assert restored.compile().pattern == pattern.pattern
        assert restored.compile().flags == pattern.flags


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
