"""
Type test predicates.

The bool/int overlap is the main trap: True must never count as a number
or a bigint.
"""

import pytest
import math
import re
from collections import OrderedDict
from datetime import date, datetime
from types import MappingProxyType

from ordered_set import OrderedSet

from tagcodec import UNDEFINED, RegExp, MAX_SAFE_INTEGER
from tagcodec import predicates as is_


class TestNumbers:

    def test_bool_is_not_numeric(self):
        for value in [True, False]:
            assert is_.is_boolean(value)
            assert not is_.is_number(value)
            assert not is_.is_bigint(value)

    def test_safe_range(self):
        assert is_.is_number(MAX_SAFE_INTEGER)
        assert not is_.is_bigint(MAX_SAFE_INTEGER)
        assert is_.is_bigint(MAX_SAFE_INTEGER + 1)
        assert not is_.is_number(MAX_SAFE_INTEGER + 1)

    def test_custom_limit(self):
        assert is_.is_bigint(1000, limit=999)
        assert is_.is_number(999, limit=999)

    def test_special_floats(self):
        assert is_.is_nan_value(math.nan)
        assert not is_.is_infinite(math.nan)
        assert is_.is_infinite(-math.inf)
        assert not is_.is_nan_value(1.0)
        assert is_.is_number(math.nan)


class TestKinds:

    def test_undefined(self):
        assert is_.is_undefined(UNDEFINED)
        assert not is_.is_undefined(None)

    def test_date_requires_datetime(self):
        assert is_.is_date(datetime(2024, 1, 1))
        assert not is_.is_date(date(2024, 1, 1))

    @pytest.mark.parametrize('value', [set(), frozenset({1}), {}.keys(), OrderedSet(['b', 'a'])])
    def test_sets(self, value):
        assert is_.is_set(value)

    @pytest.mark.parametrize('value', [{}, OrderedDict(a=1), MappingProxyType({1: 2})])
    def test_maps(self, value):
        assert is_.is_map(value)
        assert not is_.is_set(value)

    def test_regexp(self):
        assert is_.is_regexp(RegExp('a'))
        assert is_.is_regexp(re.compile('a'))
        assert not is_.is_regexp(re.compile(b'a'))
        assert not is_.is_regexp('/a/')

    def test_string(self):
        assert is_.is_string('')
        assert not is_.is_string(b'')
