"""
PyFormatter: per-location formatting instructions and the rendering pipeline.

A formatter holds, for each location of a table (header, body, bfirst,
gfirst, gfooter, footer), instruction overrides keyed by column header or by
kind. When a cell is rendered the overrides are layered, most specific last:

	formatter defaults
	< location type key < location column key
	< gfirst layers (first row of a group, body only)
	< bfirst layers (first row of the table, body only)

Header cells are always of kind 'string'; absent cells of kind 'nil'.

Subclasses only supply structural glue: delimiters, rules, decoration and
width measurement.
"""

from __future__ import annotations
import logging
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, List, Optional

from . import numeric
from .column import PyColumn
from .errors import PyTableKeyError, PyTableValueError, UnknownKeyError, UnknownLocationError, UnsupportedValueKindError
from .instruction import NO_COLOR, FormatInstruction, parse_instruction
from .naming import _entitle, _header_label, _normalize_header
from .table import AGGREGATES, PyTable
from .typing import KINDS, NIL, STRING


logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_SYMBOL = '$'

LOCATIONS = ('header', 'body', 'bfirst', 'gfirst', 'gfooter', 'footer')
TYPE_KEYS = KINDS

_NUMERIC_RUNTIME = (int, Decimal, Fraction, float)


class _Cell:
	"""A rendered cell: its text, the instruction that produced it, and the raw value."""
	__slots__ = ('text', 'instruction', 'value')

	def __init__(self, text, instruction, value=None):
		self.text = text
		self.instruction = instruction
		self.value = value

	def __repr__(self):
		return f"_Cell({self.text!r})"


class PyFormatter():
	"""
	Base formatter; renders a PyTable as plain delimited lines.

	Args:
		table: the PyTable to render
		currency_symbol: symbol used by the '$' numeric directive

	Example:
		>>> fmt = TextFormatter(tbl)
		>>> fmt.format_for('body', price='R0.2,', numeric='R').format_for('header', string='B')
		>>> print(fmt.output())
	"""

	default_format = FormatInstruction()

	# Whether output pads every cell of a column to the widest one
	aligned = False
	include_header_row = True

	def __init__(self, table: Optional[PyTable] = None, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL):
		self.table = table if table is not None else PyTable()
		if not isinstance(self.table, PyTable):
			raise PyTableValueError(f"{type(self).__name__} requires a PyTable, not {type(table).__name__}")
		self.currency_symbol = str(currency_symbol)
		self._format_at: Dict[str, Dict[str, Dict[str, Any]]] = {loc: {} for loc in LOCATIONS}
		self.footers: Dict[str, Dict[str, str]] = {}
		self.gfooters: Dict[str, Dict[str, str]] = {}

	"""
	Footers computed at output time
	"""
	def _footer_spec(self, sum_cols, agg_cols):
		spec = {}
		for h in sum_cols:
			spec[h] = 'sum'
		spec.update(agg_cols)
		for h, agg in spec.items():
			if h not in self.table:
				raise PyTableKeyError(f"No '{h}' column in table for a footer")
			if agg not in AGGREGATES:
				raise PyTableValueError(f"Unknown aggregate '{agg}' for column '{h}'")
		return spec

	def footer(self, label, *sum_cols, **agg_cols):
		"""Add a table footer; positional columns are summed, keywords name an aggregate."""
		self.footers[label] = self._footer_spec(sum_cols, agg_cols)
		return self

	def gfooter(self, label, *sum_cols, **agg_cols):
		"""Add a footer computed over, and shown after, each group."""
		self.gfooters[label] = self._footer_spec(sum_cols, agg_cols)
		return self

	def sum_footer(self, *cols):
		return self.footer('Total', *cols)

	def avg_footer(self, *cols):
		return self.footer('Average', **{c: 'avg' for c in cols})

	def min_footer(self, *cols):
		return self.footer('Minimum', **{c: 'min' for c in cols})

	def max_footer(self, *cols):
		return self.footer('Maximum', **{c: 'max' for c in cols})

	def sum_gfooter(self, *cols):
		return self.gfooter('Group Total', *cols)

	def avg_gfooter(self, *cols):
		return self.gfooter('Group Average', **{c: 'avg' for c in cols})

	def min_gfooter(self, *cols):
		return self.gfooter('Group Minimum', **{c: 'min' for c in cols})

	def max_gfooter(self, *cols):
		return self.gfooter('Group Maximum', **{c: 'max' for c in cols})

	"""
	Formatting instructions
	"""
	def format(self, **instructions):
		"""Apply instructions at every location."""
		for loc in LOCATIONS:
			self.format_for(loc, **instructions)
		return self

	def format_for(self, location, **instructions):
		"""
		Set instructions for one location, keyed by column header or kind.

		Column instructions are parsed for the column's kind. Repeated calls
		layer onto what is already set. A key that is a kind name is always
		read as that kind's default, even when a column has the same header;
		such a column takes its instructions from the kind keys only.

		Raises
		------
		UnknownLocationError
			If location is not one of LOCATIONS
		UnknownKeyError
			Naming every key that is neither a header nor a kind
		MalformedInstructionError
			If an instruction string has unrecognized directives
		"""
		if location not in LOCATIONS:
			raise UnknownLocationError(location)
		bad = [k for k in instructions if k not in TYPE_KEYS and k not in self.table]
		if bad:
			raise UnknownKeyError(location, bad)

		at = self._format_at[location]
		for key, text in instructions.items():
			kind = key if key in TYPE_KEYS else self.table.column(key).kind
			overrides = parse_instruction(text, kind)
			at[key] = {**at.get(key, {}), **overrides}
		logger.debug("format_for %s: %s", location, sorted(instructions))
		return self

	def instruction_for(self, location, header, kind, gfirst=False, bfirst=False) -> FormatInstruction:
		"""Resolve the FormatInstruction for one cell."""
		locations = [location]
		if location == 'body':
			if gfirst:
				locations.append('gfirst')
			if bfirst:
				locations.append('bfirst')
		overrides = {}
		for loc in locations:
			at = self._format_at[loc]
			overrides.update(at.get(kind, {}))
			if header not in TYPE_KEYS:
				overrides.update(at.get(header, {}))
		return self.default_format.merged_with(overrides)

	"""
	Rendering single values
	"""
	def format_cell(self, value, instruction: FormatInstruction, width: Optional[int] = None) -> str:
		"""
		Render value according to instruction.

		The kind-specific text comes first, then case, then alignment padding
		when width is given.

		Raises
		------
		UnsupportedValueKindError
			If value is not None, a bool, a number, a date or a string
		"""
		if value is None:
			text = instruction.nil_text
		elif isinstance(value, bool):
			text = self.format_boolean(value, instruction)
		elif isinstance(value, _NUMERIC_RUNTIME):
			text = self.format_numeric(value, instruction)
		elif isinstance(value, date):
			text = self.format_datetime(value, instruction)
		elif isinstance(value, str):
			text = value
		else:
			raise UnsupportedValueKindError(value)
		return self.format_string(text, instruction, width)

	def format_boolean(self, value, instruction):
		return instruction.true_text if value else instruction.false_text

	def format_datetime(self, value, instruction):
		if isinstance(value, datetime):
			return value.strftime(instruction.datetime_fmt)
		return value.strftime(instruction.date_fmt)

	def format_numeric(self, value, instruction):
		commas = instruction.commas
		post = instruction.post_digits
		pre = instruction.pre_digits
		if post >= 0:
			value = numeric.round_half_up(value, post)

		if instruction.hms:
			text = numeric.secs_to_hms(value)
			commas = False
		elif instruction.currency:
			text = numeric.currency(value, self.currency_symbol, post if post >= 0 else 2, commas)
			commas = False
		elif pre > 0:
			text = numeric.zero_padded(value, pre, post)
		elif post >= 0:
			text = numeric.fixed(value, post)
		else:
			text = str(value)

		if commas:
			text = numeric.group_digits(text)
		return text

	def format_string(self, text, instruction, width=None):
		if instruction.case == 'lower':
			text = text.lower()
		elif instruction.case == 'upper':
			text = text.upper()
		elif instruction.case == 'title':
			text = _entitle(text)
		if width is not None:
			text = self.pad(text, instruction.alignment, width)
		return text

	def pad(self, text, alignment, width):
		padding = max(0, width - self.width(text))
		if alignment == 'right':
			return ' ' * padding + text
		if alignment == 'center':
			left = padding // 2
			return ' ' * left + text + ' ' * (padding - left)
		return text + ' ' * padding

	"""
	Renderer hooks
	"""
	def width(self, text):
		"""Display width of text; renderers with invisible markup override this."""
		return len(text)

	def decorate(self, text, instruction, value=None):
		"""Apply emphasis and color in the target syntax; plain output ignores them."""
		return text

	def cell_color(self, instruction, value):
		if isinstance(value, bool):
			color = instruction.true_color if value else instruction.false_color
			if color != NO_COLOR:
				return color
		return instruction.color

	def pre_table(self, widths):
		return ''

	def post_table(self, widths):
		return ''

	def pre_header(self, widths):
		return ''

	def post_header(self, widths):
		return ''

	def pre_row(self):
		return ''

	def pre_cell(self):
		return ''

	def post_cell(self):
		return ''

	def inter_cell(self):
		return '|'

	def post_row(self):
		return '\n'

	def hline(self, widths):
		return ''

	def post_footers(self, widths):
		return ''

	"""
	Output pipeline
	"""
	def _cell(self, value, instruction):
		return _Cell(self.format_cell(value, instruction), instruction, value)

	def _header_cells(self):
		cells = {}
		for h in self.table.headers:
			inst = self.instruction_for('header', h, STRING)
			cells[h] = self._cell(_header_label(h), inst)
		return cells

	def _footer_row(self, location, label, values, aggregated):
		"""Cells of one footer; the label fills the first column when it is not aggregated."""
		row = {}
		for col in self.table.columns:
			h = col.header
			val = values.get(h)
			if h in aggregated and val is not None:
				inst = self.instruction_for(location, h, col.kind)
				row[h] = self._cell(val, inst)
			else:
				inst = self.instruction_for(location, h, NIL)
				row[h] = _Cell('', inst)
		first = self.table.headers[0] if self.table.headers else None
		if first is not None and row[first].text == '':
			inst = self.instruction_for(location, first, STRING)
			text = _header_label(_normalize_header(label) or str(label))
			row[first] = self._cell(text, inst)
		return row

	def _aggregate(self, spec, rows=None):
		values = {}
		for h, agg in spec.items():
			col = self.table.column(h)
			if rows is not None:
				col = PyColumn.from_values(h, [col[i] for i in rows], col.schema())
			values[h] = getattr(col, agg)()
		return values

	def _body_rows(self):
		rows: List[Any] = []
		columns = self.table.columns
		tbl_row_k = 0
		for grp_k, rng in enumerate(self.table.group_ranges()):
			# rule after the header and between groups
			if self.include_header_row or grp_k > 0:
				rows.append(None)
			for grp_row_k, i in enumerate(rng):
				cells = {}
				for col in columns:
					val = col[i]
					kind = NIL if val is None else col.kind
					inst = self.instruction_for(
						'body', col.header, kind, gfirst=grp_row_k == 0, bfirst=tbl_row_k == 0
					)
					cells[col.header] = self._cell(val, inst)
				rows.append(cells)
				tbl_row_k += 1
			for label, spec in self.gfooters.items():
				rows.append(None)
				rows.append(self._footer_row('gfooter', label, self._aggregate(spec, rng), spec))
		return rows

	def _footer_rows(self):
		rows: List[Any] = []
		for label, values in self.table.footers.items():
			aggregated = {h for h, v in values.items() if v is not None}
			rows.append(None)
			rows.append(self._footer_row('footer', label, values, aggregated))
		for label, spec in self.footers.items():
			rows.append(None)
			rows.append(self._footer_row('footer', label, self._aggregate(spec), spec))
		return rows

	def _finish(self, cells, widths):
		"""Decorate each cell, then pad it to its column width when aligned."""
		out = {}
		for h, cell in cells.items():
			text = self.decorate(cell.text, cell.instruction, cell.value)
			if widths is not None:
				text = self.pad(text, cell.instruction.alignment, widths[h])
			out[h] = text
		return out

	def _widths(self, header, rows):
		widths = {h: 0 for h in self.table.headers}
		for cells in [header] + [r for r in rows if r is not None]:
			for h, cell in cells.items():
				shown = self.decorate(cell.text, cell.instruction, cell.value)
				widths[h] = max(widths[h], self.width(shown))
		return widths

	def output(self):
		"""Render the table: header, body by group with group footers, then footers."""
		header = self._header_cells()
		rows = self._body_rows() + self._footer_rows()
		widths = self._widths(header, rows) if self.aligned else None
		logger.debug(
			"%s rendering %d header cells and %d rows",
			type(self).__name__, len(header), len([r for r in rows if r is not None]),
		)
		header_texts = self._finish(header, widths)
		row_texts = [None if r is None else self._finish(r, widths) for r in rows]
		return self.assemble(header_texts, row_texts, widths)

	def _line(self, texts):
		cells = [self.pre_cell() + t + self.post_cell() for t in texts.values()]
		return self.pre_row() + self.inter_cell().join(cells) + self.post_row()

	def assemble(self, header, rows, widths):
		"""Join rendered cells into the target syntax."""
		widths = widths or {h: 0 for h in header}
		parts = [self.pre_table(widths)]
		if self.include_header_row and header:
			parts.append(self.pre_header(widths))
			parts.append(self._line(header))
			parts.append(self.post_header(widths))
		for row in rows:
			if row is None:
				parts.append(self.hline(widths))
			else:
				parts.append(self._line(row))
		parts.append(self.post_footers(widths))
		parts.append(self.post_table(widths))
		return ''.join(parts)
