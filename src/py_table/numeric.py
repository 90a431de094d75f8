"""Text helpers for numeric cells: rounding, digit grouping, currency and h:m:s."""

from __future__ import annotations
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction


_WHOLE_PART_RE = re.compile(r'\A([^\d]*)(\d+)(.*)\Z', re.DOTALL)


def to_decimal(val) -> Decimal:
	"""Exact Decimal for int, Decimal and Fraction; floats go through their repr."""
	if isinstance(val, Decimal):
		return val
	if isinstance(val, float):
		return Decimal(repr(val))
	if isinstance(val, Fraction):
		with localcontext() as ctx:
			ctx.prec = 50
			return Decimal(val.numerator) / Decimal(val.denominator)
	return Decimal(val)


def round_half_up(val, places: int):
	"""Round val to places decimal places, halves away from zero.

	Integers are returned unchanged; everything else becomes a Decimal.
	"""
	if isinstance(val, int):
		return val
	d = to_decimal(val)
	if not d.is_finite():
		return d
	with localcontext() as ctx:
		# quantize needs room for every digit of the result
		ctx.prec = max(28, d.adjusted() + places + 2)
		return d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def is_whole(val) -> bool:
	if isinstance(val, int):
		return True
	return to_decimal(val) == to_decimal(val).to_integral_value()


def group_digits(text: str, sep: str = ',') -> str:
	"""
	Insert sep every three digits of the whole-number part of text.

	Exponent forms such as '1.23456789e+105' are returned unchanged.

	>>> group_digits('-123456789.01')
	'-123,456,789.01'
	"""
	if 'e' in text.lower():
		return text
	m = _WHOLE_PART_RE.match(text)
	if not m:
		return text
	prefix, whole, rest = m.groups()
	groups = []
	while len(whole) > 3:
		groups.insert(0, whole[-3:])
		whole = whole[:-3]
	groups.insert(0, whole)
	return prefix + sep.join(groups) + rest


def fixed(val, places: int) -> str:
	"""val with exactly places digits after the decimal point."""
	return f"{round_half_up(to_decimal(val), places):.{places}f}"


def zero_padded(val, pre_digits: int, post_digits: int) -> str:
	"""
	At least pre_digits digits before the point, zero-filled.

	Whole values ignore post_digits; otherwise the fraction is rounded to
	post_digits places, or dropped when post_digits is unset (-1).
	"""
	if is_whole(val):
		return f"{int(to_decimal(val)):0{pre_digits}d}"
	if post_digits >= 0:
		width = pre_digits + 1 + post_digits
		return f"{round_half_up(val, post_digits):0{width}.{post_digits}f}"
	return f"{int(round_half_up(val, 0)):0{pre_digits}d}"


def currency(val, symbol: str, places: int = 2, grouped: bool = False) -> str:
	"""
	Currency text such as '$1,234.50' or '-$3.00'.

	>>> currency(Decimal('-1234.5'), '$', grouped=True)
	'-$1,234.50'
	"""
	amount = round_half_up(to_decimal(val), places)
	text = f"{abs(amount):.{places}f}"
	if grouped:
		text = group_digits(text)
	sign = '-' if amount < 0 else ''
	return f"{sign}{symbol}{text}"


def secs_to_hms(val) -> str:
	"""
	Seconds as HH:MM:SS, with hundredths appended when there is a fraction.

	>>> secs_to_hms(6584)
	'01:49:44'
	>>> secs_to_hms(Decimal('6584.35'))
	'01:49:44.35'
	"""
	d = to_decimal(val)
	sign = '-' if d < 0 else ''
	d = abs(d)
	whole = int(d)
	frac = round_half_up(d - whole, 5)
	mins, secs = divmod(whole, 60)
	hrs, mins = divmod(mins, 60)
	result = f"{sign}{hrs:02d}:{mins:02d}:{secs:02d}"
	if frac > 0:
		result += f".{int(frac * 100):02d}"
	return result
