"""
py-table: typed in-memory tables with formatted text output

Load a table from CSV, org-mode text, lists of lists or lists of records;
each column settles on one kind (boolean, datetime, numeric or string) from
the first value it sees. Sort, filter, project, group and union tables, add
footers, then render them through a formatter.

Main classes:
    - PyTable: ordered mapping of normalized headers to columns
    - PyColumn: typed sequence of values with aggregates
    - FormatInstruction: parsed formatting directives for a cell
    - PyFormatter: instruction resolution and the rendering pipeline

Renderers:
    - AoaFormatter: list of lists of strings
    - TextFormatter: aligned plain text
    - OrgFormatter: org-mode table
    - TermFormatter: terminal grid with ANSI styling
    - LaTeXFormatter: longtable environment
"""

from .column import PyColumn
from .table import PyTable
from .readers import read_csv, read_org, read_table
from .evaluator import Evaluator
from .instruction import FormatInstruction, parse_instruction
from .formatter import DEFAULT_CURRENCY_SYMBOL, LOCATIONS, TYPE_KEYS, PyFormatter
from .formatters import AoaFormatter, LaTeXFormatter, OrgFormatter, TermFormatter, TextFormatter
from .typing import DataType
from .errors import (
	PyTableError,
	PyTableKeyError,
	PyTableTypeError,
	PyTableValueError,
	TypeConflictError,
	MalformedInstructionError,
	UnknownLocationError,
	UnknownKeyError,
	ShapeMismatchError,
	KindMismatchError,
	UnsupportedValueKindError,
	HeaderCollisionError,
)

__version__ = "0.1.0"
__all__ = [
	"PyTable",
	"PyColumn",
	"DataType",
	"Evaluator",
	"FormatInstruction",
	"parse_instruction",
	"PyFormatter",
	"AoaFormatter",
	"TextFormatter",
	"OrgFormatter",
	"TermFormatter",
	"LaTeXFormatter",
	"DEFAULT_CURRENCY_SYMBOL",
	"LOCATIONS",
	"TYPE_KEYS",
	"read_csv",
	"read_org",
	"read_table",
	"PyTableError",
	"PyTableKeyError",
	"PyTableTypeError",
	"PyTableValueError",
	"TypeConflictError",
	"MalformedInstructionError",
	"UnknownLocationError",
	"UnknownKeyError",
	"ShapeMismatchError",
	"KindMismatchError",
	"UnsupportedValueKindError",
	"HeaderCollisionError",
]
