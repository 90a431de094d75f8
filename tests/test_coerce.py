"""Coercion of raw input into column kinds"""
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction

import pytest

from py_table.coerce import convert_to_type, is_blank, to_boolean, to_datetime, to_numeric
from py_table.errors import TypeConflictError
from py_table.typing import DataType


class TestBoolean:

    @pytest.mark.parametrize("raw,expected", [
        ('t', True), ('T', True), ('true', True), ('Yes', True), ('y', True),
        ('f', False), ('FALSE', False), ('no', False), ('N', False),
        (' yes ', True), (True, True), (False, False),
    ])
    def test_recognized(self, raw, expected):
        assert to_boolean(raw) is expected

    @pytest.mark.parametrize("raw", ['tea', 'nope', 'yesterday', 'x', 1, None])
    def test_not_boolean(self, raw):
        assert to_boolean(raw) is None


class TestDatetime:

    def test_date_string(self):
        assert to_datetime('2016-01-14') == date(2016, 1, 14)

    def test_slashes(self):
        assert to_datetime('2016/1/4') == date(2016, 1, 4)

    def test_midnight_is_demoted_to_date(self):
        result = to_datetime('2016-01-14 00:00:00')
        assert result == date(2016, 1, 14)
        assert not isinstance(result, datetime)

    def test_time_of_day_kept(self):
        assert to_datetime('2016-01-14 10:30:15') == datetime(2016, 1, 14, 10, 30, 15)

    def test_org_timestamp_brackets(self):
        assert to_datetime('[2016-01-14]') == date(2016, 1, 14)
        assert to_datetime('<2016-01-14 10:30>') == datetime(2016, 1, 14, 10, 30)

    def test_bare_numbers_are_not_dates(self):
        assert to_datetime('2841381') is None
        assert to_datetime('20160114') is None

    def test_native_values_pass_through(self):
        d = date(2020, 2, 29)
        assert to_datetime(d) is d

    def test_impossible_date(self):
        assert to_datetime('2016-02-31') is None


class TestNumeric:

    def test_integer(self):
        result = to_numeric('3,123')
        assert result == 3123
        assert isinstance(result, int)

    def test_currency_and_underscores(self):
        assert to_numeric('$9,888') == 9888
        assert to_numeric('1_000_000') == 1000000

    def test_decimal(self):
        assert to_numeric('3.14159') == Decimal('3.14159')
        assert isinstance(to_numeric('3.14159'), Decimal)

    def test_exponent(self):
        assert to_numeric('1.5e3') == Decimal('1500')

    def test_ratio(self):
        assert to_numeric('1/3') == Fraction(1, 3)
        assert to_numeric('2:4') == Fraction(1, 2)

    def test_zero_denominator(self):
        assert to_numeric('1/0') is None

    def test_float_becomes_decimal(self):
        result = to_numeric(3.14159)
        assert result == Decimal('3.14159')
        assert isinstance(result, Decimal)

    @pytest.mark.parametrize("raw", ['abc', '12abc', True, '', '1.2.3'])
    def test_not_numeric(self, raw):
        assert to_numeric(raw) is None


def test_blank_values():
    assert is_blank(None)
    assert is_blank('   ')
    assert not is_blank('0')
    assert not is_blank(0)


class TestConvertToType:

    def test_open_kind_tries_boolean_first(self):
        val, dtype = convert_to_type('T', DataType())
        assert val is True
        assert dtype.kind == 'boolean'

    def test_open_kind_then_datetime_then_numeric(self):
        assert convert_to_type('2020-01-02', DataType())[1].kind == 'datetime'
        assert convert_to_type('42', DataType())[1].kind == 'numeric'
        assert convert_to_type('apple', DataType())[1].kind == 'string'

    def test_blank_keeps_kind(self):
        assert convert_to_type('', DataType()) == (None, DataType())
        assert convert_to_type(None, DataType('numeric')) == (None, DataType('numeric'))

    def test_fixed_kind_only_tries_its_coercion(self):
        # 'T' would be a boolean in an open column
        val, dtype = convert_to_type('T', DataType('string'))
        assert val == 'T'
        assert dtype.kind == 'string'

    def test_conflict_names_column_and_value(self):
        with pytest.raises(TypeConflictError) as excinfo:
            convert_to_type('apple', DataType('numeric'), 'price')
        assert excinfo.value.column == 'price'
        assert excinfo.value.value == 'apple'
        assert 'price' in str(excinfo.value)
