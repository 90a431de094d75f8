from datetime import date, datetime, timedelta
from decimal import Decimal
from fractions import Fraction

from .coerce import convert_to_type
from .display import _printr
from .errors import KindMismatchError, PyTableTypeError, TypeConflictError
from .typing import BOOLEAN, DATETIME, NIL, NUMERIC, STRING, DataType, infer_kind

from typing import Any, Iterable


def _to_decimal(x):
	if isinstance(x, Fraction):
		return Decimal(x.numerator) / Decimal(x.denominator)
	return Decimal(x)


class PyColumn():
	""" Typed, ordered sequence of values that skips absent values in aggregates """
	_dtype = None  # DataType instance (private)
	_underlying = None
	_name = None

	def __init__(self, header, items: Iterable[Any] = ()):
		"""
		Create a column named header, appending each of items in turn.
		"""
		self._name = header
		self._dtype = DataType()
		self._underlying = ()
		for item in items:
			self.append(item)

	@classmethod
	def from_values(cls, header, values: Iterable[Any], dtype=None):
		"""
		Build a column from values that are already in their stored form.

		No text coercion is applied, so a string column holding 'T' stays a
		string column. Floats are stored as Decimal. Mixed kinds raise
		TypeConflictError, and values of no supported kind raise
		PyTableTypeError.
		"""
		col = cls(header)
		dtype = dtype if dtype is not None else DataType()
		items = []
		for v in values:
			if isinstance(v, float):
				v = Decimal(repr(v))
			kind = infer_kind(v)
			if kind is None:
				raise PyTableTypeError(
					f"Column '{header}' cannot hold {v!r} of class {type(v).__name__}"
				)
			if kind != NIL and not dtype.is_open and kind != dtype.kind:
				raise TypeConflictError(header, v, dtype.kind)
			dtype = dtype.fixed_by(v)
			items.append(v)
		col._underlying = tuple(items)
		col._dtype = dtype
		return col

	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	@property
	def header(self):
		return self._name

	@property
	def kind(self):
		return self._dtype.kind

	@property
	def items(self):
		return self._underlying

	def convert(self, val):
		"""Coerce val against this column without storing it.

		Returns (value, DataType) so callers can validate a whole row first.
		"""
		return convert_to_type(val, self._dtype, self._name)

	def append(self, val):
		"""Coerce and append val; the column is unchanged if coercion fails."""
		new_val, new_dtype = self.convert(val)
		self._store(new_val, new_dtype)
		return self

	def _store(self, new_val, new_dtype):
		self._underlying = self._underlying + (new_val,)
		self._dtype = new_dtype

	def __lshift__(self, other):
		""" The << operator appends a single raw value """
		return self.append(other)

	def __add__(self, other):
		"""Return a new column with the items of other appended to ours."""
		if not self._dtype.accepts(other.schema()):
			raise KindMismatchError(
				f"Cannot combine a {self.kind} column with a {other.kind} column"
			)
		return PyColumn.from_values(self._name, self._underlying + other.items, self._dtype)

	def copy(self, name=...):
		use_name = self._name if name is ... else name
		new = PyColumn(use_name)
		new._underlying = self._underlying
		new._dtype = self._dtype
		return new

	def __getitem__(self, key):
		return self._underlying[key]

	def __iter__(self):
		return iter(self._underlying)

	def __len__(self):
		return len(self._underlying)

	def __repr__(self):
		return _printr(self)

	def to_list(self):
		return list(self._underlying)

	def size(self):
		return (len(self),)

	@property
	def last_i(self):
		return len(self) - 1

	def _present(self):
		return [v for v in self._underlying if v is not None]

	def _require(self, op, *kinds):
		if self.kind != NIL and self.kind not in kinds:
			raise PyTableTypeError(
				f"Aggregate '{op}' cannot be applied to a {self.kind} column '{self._name}'"
			)

	"""
	Aggregates - absent values are skipped
	"""
	def first(self):
		present = self._present()
		return present[0] if present else None

	def last(self):
		present = self._present()
		return present[-1] if present else None

	def count(self):
		return len(self._present())

	def rng_s(self):
		"""String of the first and last values."""
		first = self.first()
		last = self.last()
		return f"{'' if first is None else first}..{'' if last is None else last}"

	def sum(self):
		"""Sum of the present values; string columns concatenate."""
		self._require('sum', NUMERIC, STRING)
		present = self._present()
		if not present:
			return None
		if self.kind == STRING:
			return ''.join(present)
		if any(isinstance(v, Fraction) for v in present) and any(isinstance(v, Decimal) for v in present):
			# Decimal and Fraction do not add directly
			return sum(_to_decimal(v) for v in present)
		return sum(present)

	def min(self):
		self._require('min', NUMERIC, STRING, DATETIME)
		present = self._present()
		return min(present, key=self._sort_key) if present else None

	def max(self):
		self._require('max', NUMERIC, STRING, DATETIME)
		present = self._present()
		return max(present, key=self._sort_key) if present else None

	def avg(self):
		"""
		Mean of the present values.

		Numeric columns always yield a Decimal, even over integer data.
		Datetime columns yield the mean instant, as a date when it falls on
		midnight.
		"""
		self._require('avg', NUMERIC, DATETIME)
		present = self._present()
		if not present:
			return None
		if self.kind == DATETIME:
			return self._avg_datetime(present)
		total = sum(_to_decimal(v) for v in present)
		return total / Decimal(len(present))

	mean = avg

	@staticmethod
	def _sort_key(v):
		# dates and datetimes compare on a common footing
		if isinstance(v, date) and not isinstance(v, datetime):
			return datetime.combine(v, datetime.min.time())
		return v

	def _avg_datetime(self, present):
		base = datetime(1970, 1, 1)
		seconds = [(self._sort_key(v) - base).total_seconds() for v in present]
		result = base + timedelta(seconds=sum(seconds) / len(seconds))
		if result.time() == datetime.min.time():
			return result.date()
		return result

	def any(self):
		self._require('any', BOOLEAN)
		return any(self._present())

	def all(self):
		self._require('all', BOOLEAN)
		return all(self._present())

	def none(self):
		self._require('none', BOOLEAN)
		return not any(self._present())

	def one(self):
		self._require('one', BOOLEAN)
		return sum(1 for v in self._present() if v) == 1
