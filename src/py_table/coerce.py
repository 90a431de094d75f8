"""Coercion of raw cell input into the supported value kinds.

Each ``to_*`` function is total: it returns the coerced value, or None when
the input does not look like a value of that kind.
"""

from __future__ import annotations
import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Optional, Tuple

from dateutil import parser as date_parser

from .errors import TypeConflictError
from .typing import BOOLEAN, DATETIME, NUMERIC, STRING, DataType


_TRUE_RE = re.compile(r'\A(true|t|yes|y)\Z', re.IGNORECASE)
_FALSE_RE = re.compile(r'\A(false|f|no|n)\Z', re.IGNORECASE)

# Only strings with something like 2016-01-14 or 2016/1/14 in them are dates;
# otherwise bare numbers such as 2841381 would parse as dates.
_DATE_SHAPE_RE = re.compile(r'\b\d{4}[-/]\d\d?[-/]\d\d?\b')
_TIMESTAMP_BRACKETS_RE = re.compile(r'[\[\]<>]')

_NUMERIC_JUNK_RE = re.compile(r'[,_$€£¥]')
_INTEGER_RE = re.compile(r'\A[-+]?\d+\Z')
_DECIMAL_RE = re.compile(r'\A[-+]?(\d+\.\d*|\d*\.\d+|\d+)([eE][-+]?\d+)?\Z')
_RATIO_RE = re.compile(r'\A([-+]?\d+)\s*[:/]\s*(\d+)\Z')


def _clean(val: Any) -> str:
	return re.sub(r'\s+', ' ', str(val)).strip()


def is_blank(val: Any) -> bool:
	"""None and whitespace-only strings are absent values."""
	if val is None:
		return True
	return isinstance(val, str) and val.strip() == ''


def to_boolean(val: Any) -> Optional[bool]:
	if isinstance(val, bool):
		return val
	if not isinstance(val, str):
		return None
	text = _clean(val)
	if _TRUE_RE.match(text):
		return True
	if _FALSE_RE.match(text):
		return False
	return None


def to_datetime(val: Any) -> Optional[date]:
	"""Parse val as a date, or a datetime when it has a time of day."""
	if isinstance(val, (date, datetime)):
		return val
	if not isinstance(val, str):
		return None
	text = _clean(val)
	if not _DATE_SHAPE_RE.search(text):
		return None
	text = _clean(_TIMESTAMP_BRACKETS_RE.sub(' ', text))
	try:
		parsed = date_parser.parse(text, ignoretz=True)
	except (ValueError, OverflowError):
		return None
	if parsed.time() == time(0, 0):
		return parsed.date()
	return parsed


def to_numeric(val: Any):
	"""Return an int, Decimal or Fraction, or None.

	Floats are converted through their shortest repr so that 3.14159 becomes
	Decimal('3.14159') rather than its binary expansion.
	"""
	if isinstance(val, bool):
		return None
	if isinstance(val, (int, Decimal, Fraction)):
		return val
	if isinstance(val, float):
		return Decimal(repr(val))
	if not isinstance(val, str):
		return None
	text = _NUMERIC_JUNK_RE.sub('', _clean(val))
	if text == '':
		return None
	if _INTEGER_RE.match(text):
		return int(text)
	if _DECIMAL_RE.match(text):
		try:
			return Decimal(text)
		except InvalidOperation:
			return None
	m = _RATIO_RE.match(text)
	if m:
		denominator = int(m.group(2))
		if denominator == 0:
			return None
		return Fraction(int(m.group(1)), denominator)
	return None


def to_string(val: Any) -> str:
	return str(val)


# Tried in this order while a column's kind is still open
COERCIONS = (
	(BOOLEAN, to_boolean),
	(DATETIME, to_datetime),
	(NUMERIC, to_numeric),
	(STRING, to_string),
)

_BY_KIND = dict(COERCIONS)


def convert_to_type(val: Any, dtype: DataType, column: str = "") -> Tuple[Any, DataType]:
	"""
	Coerce a raw value against a column's DataType.

	Parameters
	----------
	val : Any
		Raw input (text, number, boolean, date, or None)
	dtype : DataType
		The column's current kind
	column : str
		Column name, used in error messages

	Returns
	-------
	(value, DataType)
		The coerced value and the column's (possibly newly fixed) kind

	Raises
	------
	TypeConflictError
		If val is not absent and cannot be coerced to a fixed kind
	"""
	if is_blank(val):
		return None, dtype

	if dtype.is_open:
		for kind, convert in COERCIONS:
			new_val = convert(val)
			if new_val is not None:
				return new_val, DataType(kind)

	new_val = _BY_KIND[dtype.kind](val)
	if new_val is None:
		raise TypeConflictError(column, val, dtype.kind)
	return new_val, dtype
