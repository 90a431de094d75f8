import logging

from .column import PyColumn
from .display import _printr
from .errors import (
	HeaderCollisionError,
	KindMismatchError,
	PyTableKeyError,
	PyTableTypeError,
	PyTableValueError,
	ShapeMismatchError,
)
from .evaluator import Evaluator
from .naming import _auto_headers, _normalize_header
from .coerce import to_numeric


logger = logging.getLogger(__name__)

AGGREGATES = ('sum', 'first', 'last', 'min', 'max', 'avg', 'count', 'any', 'all')

# Footer label stored for each convenience footer
FOOTER_LABELS = {
	'sum': 'total',
	'avg': 'average',
	'min': 'minimum',
	'max': 'maximum',
}

_REVERSE_MARKER = '!'


def _missing_col_error(name, context="PyTable"):
	return PyTableKeyError(f"Column '{name}' not found in {context}")


def _is_rule(cell):
	"""True for org-style horizontal rule cells such as '|---+---' or '----'."""
	if not isinstance(cell, str):
		return False
	text = cell.strip()
	return text != '' and text.lstrip('|').startswith(('-', '+')) and set(text) <= set('|-+')


def _record_items(record):
	"""Key/value pairs of a dict or any object exposing keys() and values()."""
	if isinstance(record, dict):
		return list(record.items())
	if hasattr(record, 'keys') and hasattr(record, 'values'):
		return list(zip(record.keys(), record.values()))
	raise PyTableTypeError(
		f"Cannot add a row from an object of class {type(record).__name__}"
	)


class _RowView:
	"""Lightweight row view with attribute and item access by header."""
	__slots__ = ('_values', '_index')

	def __init__(self, values, index):
		self._values = values
		self._index = index

	def __getattr__(self, attr):
		"""Access values by header; 'row' is the 1-based ordinal unless a column shadows it."""
		try:
			return self._values[attr]
		except KeyError:
			pass
		if attr == 'row':
			return self._index + 1
		raise AttributeError(f"Row has no attribute '{attr}'")

	def __getitem__(self, key):
		"""Access values by position or header."""
		if isinstance(key, int):
			return list(self._values.values())[key]
		if isinstance(key, str):
			try:
				return getattr(self, key)
			except AttributeError:
				raise _missing_col_error(key, "row") from None
		raise TypeError(f"Row indices must be int or str, not {type(key).__name__}")

	def __iter__(self):
		return iter(self._values.values())

	def __len__(self):
		return len(self._values)

	def keys(self):
		return self._values.keys()

	def values(self):
		return self._values.values()

	def to_dict(self):
		return dict(self._values)

	def __repr__(self):
		values = [repr(v) for v in self._values.values()]
		return f"Row({self._index}: {', '.join(values)})"


class PyTable():
	""" Ordered mapping of normalized headers to columns of the same length """

	def __init__(self, initial=None):
		"""
		Build a table from another PyTable, a list of records (dicts or
		objects exposing keys() and values()), or a list of lists.

		Files and text streams are read with py_table.read_table.
		"""
		self._columns = {}
		self._raw_keys = {}
		self._length = 0
		self._boundaries = []
		self.footers = {}

		if initial is None:
			return
		if isinstance(initial, PyTable):
			self._load_table(initial)
			return
		if isinstance(initial, (str, bytes)) or not hasattr(initial, '__iter__'):
			raise PyTableTypeError(
				f"Cannot initialize PyTable with {type(initial).__name__}; use read_table for files"
			)
		rows = list(initial)
		if not rows:
			return
		first = rows[0]
		if isinstance(first, (list, tuple)):
			self._load_aoa(rows)
		elif isinstance(first, PyTable):
			for tbl in rows:
				self._load_table(tbl)
		else:
			self._load_aoh(rows)

	"""
	Constructors
	"""
	@classmethod
	def from_aoh(cls, records):
		tbl = cls()
		tbl._load_aoh(records)
		return tbl

	@classmethod
	def from_aoa(cls, rows):
		tbl = cls()
		tbl._load_aoa(list(rows))
		return tbl

	@classmethod
	def from_table(cls, other):
		tbl = cls()
		tbl._load_table(other)
		return tbl

	@classmethod
	def from_csv(cls, io):
		from .readers import read_csv
		return read_csv(io, cls)

	@classmethod
	def from_org(cls, io):
		from .readers import read_org
		return read_org(io, cls)

	@classmethod
	def _from_columns(cls, columns, boundaries=None, raw_keys=None):
		"""
		Assemble a table from already-typed PyColumns of equal length.

		raw_keys maps headers to the record keys they were first seen under,
		so rows keyed like the source table can still be added.
		"""
		raw_keys = raw_keys or {}
		tbl = cls()
		for col in columns:
			if col.header in tbl._columns:
				raise HeaderCollisionError(f"Duplicate column '{col.header}'")
			tbl._columns[col.header] = col
			tbl._raw_keys[col.header] = raw_keys.get(col.header, col.header)
		tbl._length = len(columns[0]) if columns else 0
		if boundaries:
			tbl._boundaries = list(boundaries)
		return tbl

	def _load_aoh(self, records):
		for record in records:
			self.add_row(record)
		logger.debug("loaded %d records", self._length)
		return self

	def _load_aoa(self, rows):
		if not rows:
			return self
		first = rows[0]
		if any(c is not None and to_numeric(c) is not None for c in first):
			headers = _auto_headers(len(first))
			data = rows
		else:
			headers = [str(h).strip() for h in first]
			data = rows[1:]
		for row in data:
			# None is an hline marker in org-babel output
			if row is None or (row and _is_rule(row[0])):
				continue
			row = [c.strip() if isinstance(c, str) else c for c in row]
			self.add_row(dict(zip(headers, row)))
		logger.debug("loaded %d rows under headers %s", self._length, headers)
		return self

	def _load_table(self, other):
		# values in other are already typed; copy columns rather than re-coercing text
		if self._columns:
			combined = self.union(other)
			self._columns = combined._columns
			self._length = combined._length
			self._boundaries = []
		else:
			for col in other.columns:
				self._columns[col.header] = col.copy()
				self._raw_keys[col.header] = other._raw_keys.get(col.header, col.header)
			self._length = len(other)
			self._boundaries = list(other._boundaries)
		for label, footer in other.footers.items():
			self.footers[label] = dict(footer)
		return self

	"""
	Construction by rows and columns
	"""
	def _normalize_key(self, raw):
		header = _normalize_header(raw)
		if header is None:
			raise PyTableValueError(f"Header {raw!r} is empty after normalization")
		seen = self._raw_keys.get(header)
		if seen is not None and seen != str(raw):
			raise HeaderCollisionError(
				f"Headers {seen!r} and {str(raw)!r} both normalize to '{header}'"
			)
		return header

	def add_row(self, record):
		"""
		Append one record, a mapping from header-like keys to raw values.

		Every value is coerced before any column changes, so a record that
		fails coercion leaves the table untouched. Known columns missing from
		the record receive None; new columns are back-filled with None.
		"""
		pending = {}
		for raw, val in _record_items(record):
			header = self._normalize_key(raw)
			if header in pending:
				raise HeaderCollisionError(f"Header '{header}' appears twice in one record")
			col = self._columns.get(header)
			if col is None:
				col = PyColumn(header, [None] * self._length)
			new_val, new_dtype = col.convert(val)
			pending[header] = (str(raw), col, new_val, new_dtype)

		for header, (raw, col, new_val, new_dtype) in pending.items():
			if header not in self._columns:
				self._columns[header] = col
				self._raw_keys[header] = raw
			col._store(new_val, new_dtype)
		for header, col in self._columns.items():
			if header not in pending:
				col._store(None, col.schema())
		self._length += 1
		self._boundaries = []
		return self

	def __lshift__(self, other):
		""" The << operator appends a record """
		return self.add_row(other)

	def add_column(self, header, items):
		"""Add a full column; its length must match the table's row count."""
		raw = str(header)
		header = self._normalize_key(header)
		if header in self._columns:
			raise HeaderCollisionError(f"Table already has a column with header '{header}'")
		col = PyColumn(header, items)
		if self._columns and len(col) != self._length:
			raise PyTableValueError(
				f"Column '{header}' has length {len(col)}, but table has {self._length} rows."
			)
		self._columns[header] = col
		self._raw_keys[header] = raw
		self._length = len(col)
		return self

	"""
	Access
	"""
	@property
	def headers(self):
		return list(self._columns)

	@property
	def columns(self):
		return list(self._columns.values())

	@property
	def types(self):
		return {h: col.kind for h, col in self._columns.items()}

	def column(self, name):
		try:
			return self._columns[name]
		except KeyError:
			raise _missing_col_error(name) from None

	def __getitem__(self, key):
		if isinstance(key, str):
			return self.column(key)
		if isinstance(key, int):
			if key < 0:
				key += self._length
			if not 0 <= key < self._length:
				raise IndexError(f"Row index {key} out of range")
			return _RowView(self._row_dict(key), key)
		raise TypeError(f"Table indices must be int or str, not {type(key).__name__}")

	def __getattr__(self, attr):
		"""Access columns by header as attributes."""
		columns = self.__dict__.get('_columns', {})
		if attr in columns:
			return columns[attr]
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	def __dir__(self):
		return sorted(set(object.__dir__(self)) | set(self._columns))

	def __contains__(self, header):
		return header in self._columns

	def __len__(self):
		return self._length

	def size(self):
		return (self._length, len(self._columns))

	def is_empty(self):
		return self._length == 0

	def _row_dict(self, index):
		return {h: col[index] for h, col in self._columns.items()}

	def __iter__(self):
		for i in range(self._length):
			yield _RowView(self._row_dict(i), i)

	def rows(self):
		"""Rows as a list of dicts keyed by header."""
		return [self._row_dict(i) for i in range(self._length)]

	def __repr__(self):
		return _printr(self)

	"""
	Groups
	"""
	@property
	def group_boundaries(self):
		"""Exclusive end index of each group; one group spans the whole table by default."""
		if self._boundaries:
			return list(self._boundaries)
		return [self._length] if self._length else []

	def group_ranges(self):
		ranges = []
		start = 0
		for end in self.group_boundaries:
			ranges.append(range(start, end))
			start = end
		return ranges

	def groups(self):
		"""Each group as a list of row dicts."""
		return [[self._row_dict(i) for i in rng] for rng in self.group_ranges()]

	"""
	Transforms - each returns a new PyTable
	"""
	def _take(self, indices, boundaries=None):
		columns = [
			PyColumn.from_values(col.header, [col[i] for i in indices], col.schema())
			for col in self._columns.values()
		]
		return self._from_columns(columns, boundaries, self._raw_keys)

	def _check_headers(self, names):
		for name in names:
			if name not in self._columns:
				raise _missing_col_error(name)

	def order_by(self, *keys):
		"""
		Stable sort on one or more headers.

		Suffix a header with '!' to sort that key descending. Absent values
		sort before present ones. The result has a group boundary wherever
		the sort-key values change.

		Example:
			tbl.order_by('d!', 'c')
		"""
		if not keys:
			raise PyTableValueError("order_by requires at least one column")
		specs = []
		for key in keys:
			reverse = key.endswith(_REVERSE_MARKER)
			name = key[:-len(_REVERSE_MARKER)] if reverse else key
			specs.append((name, reverse))
		self._check_headers([name for name, _ in specs])

		order = list(range(self._length))
		for name, reverse in reversed(specs):
			col = self._columns[name]
			absent = [i for i in order if col[i] is None]
			present = [i for i in order if col[i] is not None]
			present.sort(key=lambda i: PyColumn._sort_key(col[i]), reverse=reverse)
			order = absent + present

		key_cols = [self._columns[name] for name, _ in specs]
		boundaries = []
		for pos in range(1, len(order)):
			prev = tuple(c[order[pos - 1]] for c in key_cols)
			cur = tuple(c[order[pos]] for c in key_cols)
			if prev != cur:
				boundaries.append(pos)
		if order:
			boundaries.append(len(order))
		return self._take(order, boundaries)

	def _row_env(self, index):
		env = self._row_dict(index)
		env.setdefault('row', index + 1)
		return env

	def select(self, *names, **projections):
		"""
		Project the table onto columns.

		Positional names are kept in the order given. Each keyword names an
		output column; its source is an existing header (a rename or copy), a
		string expression over the row's fields, or a callable taking the row
		view. Projections are evaluated in order, so later ones may refer to
		earlier ones. The 1-based row ordinal is available as ``row`` and
		``@row``.

		Example:
			tbl.select('two_words', row='@row', s_squared='s * s',
			           arb=lambda r: r.s_squared / (r.a + r.c))
		"""
		self._check_headers(names)
		evaluator = Evaluator()
		out_names = list(names) + [_normalize_header(k) or k for k in projections]
		if len(set(out_names)) != len(out_names):
			raise HeaderCollisionError(f"Duplicate output columns in select: {out_names}")

		computed = {name: [] for name in projections}
		for i in range(self._length):
			env = self._row_env(i)
			evaluator.ivars['row'] = i + 1
			for new_name, source in projections.items():
				if isinstance(source, str) and source in self._columns:
					val = env[source]
				elif isinstance(source, str):
					val = evaluator.evaluate(source, env)
				elif callable(source):
					val = source(_RowView(env, i))
				else:
					raise PyTableTypeError(
						f"Projection '{new_name}' must be a column name, expression or callable"
					)
				env[new_name] = val
				computed[new_name].append(val)

		columns = [self._columns[name].copy() for name in names]
		for (new_name, source), out_name in zip(projections.items(), out_names[len(names):]):
			dtype = None
			if isinstance(source, str) and source in self._columns:
				dtype = self._columns[source].schema()
			columns.append(PyColumn.from_values(out_name, computed[new_name], dtype))
		raw_keys = {name: self._raw_keys.get(name, name) for name in names}
		raw_keys.update(zip(out_names[len(names):], projections))
		return self._from_columns(columns, raw_keys=raw_keys)

	def where(self, predicate):
		"""
		Keep the rows for which predicate is truthy.

		predicate is a string expression over the row's fields (plus ``row``
		and ``@row``), or a callable taking the row view. A None result drops
		the row.

		Example:
			tbl.where('code == "S" and raw < 10_000')
		"""
		evaluator = Evaluator()
		keep = []
		for i in range(self._length):
			env = self._row_env(i)
			evaluator.ivars['row'] = i + 1
			if isinstance(predicate, str):
				result = evaluator.evaluate(predicate, env)
			elif callable(predicate):
				result = predicate(_RowView(env, i))
			else:
				raise PyTableTypeError("where requires an expression string or a callable")
			if result is not None and result:
				keep.append(i)
		logger.debug("where kept %d of %d rows", len(keep), self._length)
		return self._take(keep)

	def group_by(self, *keys, **aggregations):
		"""
		Collapse rows sharing the values of keys into one row each.

		Keyword arguments map a column to an aggregate in AGGREGATES; the
		result column is named '{aggregate}_{column}'. Every other non-key
		column is captured as 'first_{column}'. Groups appear in the order
		their keys first appear.

		Example:
			tbl.group_by('date', 'code', shares='sum', ref='first')
		"""
		if not keys:
			raise PyTableValueError("group_by requires at least one key column")
		self._check_headers(keys)
		self._check_headers(aggregations)
		for col_name, agg in aggregations.items():
			if agg not in AGGREGATES:
				raise PyTableValueError(
					f"Unknown aggregate '{agg}' for column '{col_name}'; expected one of {', '.join(AGGREGATES)}"
				)

		partition_index = {}
		key_cols = [self._columns[k] for k in keys]
		for i in range(self._length):
			key = tuple(c[i] for c in key_cols)
			partition_index.setdefault(key, []).append(i)
		group_items = list(partition_index.items())

		plan = list(aggregations.items())
		for header in self._columns:
			if header not in keys and header not in aggregations:
				plan.append((header, 'first'))

		result_cols = []
		for pos, key_col in enumerate(key_cols):
			result_cols.append(PyColumn.from_values(
				key_col.header, [key[pos] for key, _ in group_items], key_col.schema()
			))
		for col_name, agg in plan:
			src = self._columns[col_name]
			out = []
			for _, row_indices in group_items:
				part = PyColumn.from_values(col_name, [src[i] for i in row_indices], src.schema())
				out.append(getattr(part, agg)())
			result_cols.append(PyColumn.from_values(f"{agg}_{col_name}", out))
		return self._from_columns(result_cols, raw_keys=self._raw_keys)

	def union(self, other):
		"""
		Rows of this table followed by the rows of other.

		Columns are matched by position and the result keeps this table's
		headers. Column counts must match (ShapeMismatchError) and kinds must
		agree position by position (KindMismatchError), an all-absent column
		being compatible with any kind.
		"""
		mine = self.columns
		theirs = other.columns
		if len(mine) != len(theirs):
			raise ShapeMismatchError(
				f"Cannot union a table of {len(mine)} columns with one of {len(theirs)} columns"
			)
		for pos, (a, b) in enumerate(zip(mine, theirs)):
			if not a.schema().accepts(b.schema()):
				raise KindMismatchError(
					f"Column {pos + 1} ('{a.header}' vs '{b.header}') is {a.kind} in one table and {b.kind} in the other"
				)
		return self._from_columns([a + b for a, b in zip(mine, theirs)], raw_keys=self._raw_keys)

	"""
	Footers
	"""
	def _footer_values(self, sum_cols, agg_cols, rows=None):
		cols = agg_cols.copy()
		for name in sum_cols:
			cols.setdefault(name, 'sum')
		self._check_headers(cols)
		values = {h: None for h in self._columns}
		for name, agg in cols.items():
			if agg not in AGGREGATES:
				raise PyTableValueError(f"Unknown aggregate '{agg}' for column '{name}'")
			col = self._columns[name]
			if rows is not None:
				col = PyColumn.from_values(name, [col[i] for i in rows], col.schema())
			values[name] = getattr(col, agg)()
		return values

	def add_footer(self, label, *sum_cols, **agg_cols):
		"""
		Add a footer row named label.

		Positional columns are summed; keywords map a column to any aggregate
		in AGGREGATES. Columns not mentioned hold None.
		"""
		key = _normalize_header(label)
		if key is None:
			raise PyTableValueError(f"Footer label {label!r} is empty after normalization")
		self.footers[key] = self._footer_values(sum_cols, agg_cols)
		return self

	def _add_agg_footer(self, agg, cols):
		if isinstance(cols, str):
			cols = [cols]
		return self.add_footer(FOOTER_LABELS[agg], **{c: agg for c in cols})

	def add_sum_footer(self, cols):
		return self._add_agg_footer('sum', cols)

	def add_avg_footer(self, cols):
		return self._add_agg_footer('avg', cols)

	def add_min_footer(self, cols):
		return self._add_agg_footer('min', cols)

	def add_max_footer(self, cols):
		return self._add_agg_footer('max', cols)

	"""
	Output
	"""
	def _render(self, formatter_cls, formats, **kwargs):
		fmt = formatter_cls(self, **kwargs)
		if formats:
			fmt.format(**formats)
		return fmt.output()

	def to_aoa(self, formats=None, **kwargs):
		"""Array of arrays of strings, with None marking horizontal rules."""
		from .formatters import AoaFormatter
		return self._render(AoaFormatter, formats, **kwargs)

	def to_text(self, formats=None, **kwargs):
		from .formatters import TextFormatter
		return self._render(TextFormatter, formats, **kwargs)

	def to_org(self, formats=None, **kwargs):
		from .formatters import OrgFormatter
		return self._render(OrgFormatter, formats, **kwargs)

	def to_term(self, formats=None, **kwargs):
		from .formatters import TermFormatter
		return self._render(TermFormatter, formats, **kwargs)

	def to_latex(self, formats=None, **kwargs):
		from .formatters import LaTeXFormatter
		return self._render(LaTeXFormatter, formats, **kwargs)
