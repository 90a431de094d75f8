"""Display and repr logic for PyColumn and PyTable."""

from __future__ import annotations
from datetime import date
from typing import List

from .typing import NUMERIC, STRING


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5


def _format_value(v, kind) -> str:
	if v is None:
		return '.'
	if isinstance(v, date):
		return v.isoformat(sep=' ') if hasattr(v, 'hour') else v.isoformat()
	if kind == STRING:
		return repr(v)
	return str(v)


def _format_column(col, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	vals = col._underlying
	if len(vals) > max_preview * 2:
		preview = list(vals[:max_preview]) + [...] + list(vals[-max_preview:])
	else:
		preview = list(vals)

	kind = col._dtype.kind
	return ['...' if v is ... else _format_value(v, kind) for v in preview]


def _align(cells: List[str], width: int, kind) -> List[str]:
	# numeric right, others left
	if kind == NUMERIC:
		return [s.rjust(width) for s in cells]
	return [s.ljust(width) for s in cells]


def _footer(pt, kinds=None, truncated=False, shown=MAX_HEAD_COLS) -> str:
	"""Generate footer line based on shape and kinds."""
	shape = pt.size()
	if len(shape) == 1:
		return f"# {shape[0]} element column <{pt._dtype.kind}>"

	rows, cols = shape
	if not kinds:
		return f"# {rows}×{cols} table"
	if truncated:
		d = ", ".join(kinds[:shown]) + ", ..., " + ", ".join(kinds[-shown:])
	else:
		d = ", ".join(kinds)
	return f"# {rows}×{cols} table <{d}>"


def _repr_column(c) -> str:
	"""Pretty repr for a single PyColumn."""
	formatted = _format_column(c)
	header_text = c._name or ""
	width = max([len(s) for s in formatted] + [len(header_text)])

	lines = []
	if header_text:
		lines.extend(_align([header_text], width, c._dtype.kind))
	lines.extend(_align(formatted, width, c._dtype.kind))
	lines.append("")
	lines.append(_footer(c))
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a PyTable."""
	cols = tbl.columns
	num_cols = len(cols)

	if num_cols == 0:
		return "# 0×0 table"

	truncated = num_cols > MAX_HEAD_COLS * 2
	if truncated:
		col_indices = list(range(MAX_HEAD_COLS)) + list(range(num_cols - MAX_HEAD_COLS, num_cols))
	else:
		col_indices = list(range(num_cols))

	kinds_all = [col.kind for col in cols]

	shown_cols = []
	for i in col_indices:
		col = cols[i]
		cells = _format_column(col)
		width = max([len(s) for s in cells] + [len(col.header)])
		shown_cols.append(_align([col.header] + cells, width, col.kind))

	# Insert "..." column if truncated
	if truncated:
		height = len(shown_cols[0])
		shown_cols.insert(MAX_HEAD_COLS, ["..."] * height)

	lines = []
	for r in range(len(shown_cols[0])):
		lines.append("  ".join(col[r] for col in shown_cols).rstrip())

	lines.append("")
	lines.append(_footer(tbl, kinds_all, truncated, MAX_HEAD_COLS))
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by PyColumn.__repr__ and PyTable.__repr__."""
	if len(obj.size()) == 1:
		return _repr_column(obj)
	return _repr_table(obj)
