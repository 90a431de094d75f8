"""
Formatting instructions and their mini-language.

An instruction string such as ``"B,0.2"`` is parsed, with knowledge of the
kind of value it will format, into a dict holding only the directives the
string actually names. Layering those dicts onto a FormatInstruction with
``merged_with`` gives the instruction used for a single cell.

Directives valid for every kind:
	u, U, t      lower, upper and title case
	B, I         bold, italic
	L, C, R      left, center, right alignment
	c[color]     color
	n[text]      text shown for absent values

numeric:   m.n (pad to m digits, round to n places), ',' (group digits),
           '$' (currency), H (seconds as HH:MM:SS)
datetime:  d[fmt] (strftime pattern for dates), D[fmt] (for datetimes)
boolean:   b[true,false] (texts), c[tcolor,fcolor] (colors),
           Y (Y/N), T (T/F), X (X/empty)
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

from .errors import MalformedInstructionError
from .typing import BOOLEAN, DATETIME, KINDS, NUMERIC


DEFAULT_DATE_FMT = '%Y-%m-%d'
DEFAULT_DATETIME_FMT = '%Y-%m-%d %H:%M:%S'

CASES = ('none', 'lower', 'upper', 'title')
ALIGNMENTS = ('left', 'center', 'right')

# Color value meaning "leave the renderer's color alone"
NO_COLOR = 'none'


@dataclass(frozen=True)
class FormatInstruction:
	"""
	Immutable bundle of rendering directives for one cell.

	pre_digits and post_digits use -1 for "unset".
	"""
	case: str = 'none'
	alignment: str = 'left'
	bold: bool = False
	italic: bool = False
	color: str = NO_COLOR
	pre_digits: int = -1
	post_digits: int = -1
	commas: bool = False
	currency: bool = False
	hms: bool = False
	date_fmt: str = DEFAULT_DATE_FMT
	datetime_fmt: str = DEFAULT_DATETIME_FMT
	true_text: str = 'T'
	false_text: str = 'F'
	true_color: str = NO_COLOR
	false_color: str = NO_COLOR
	nil_text: str = ''

	def __post_init__(self):
		if self.case not in CASES:
			raise ValueError(f"Unknown case '{self.case}'")
		if self.alignment not in ALIGNMENTS:
			raise ValueError(f"Unknown alignment '{self.alignment}'")

	def merged_with(self, overrides: Mapping[str, Any]) -> "FormatInstruction":
		"""Return a copy with overrides applied; self is never changed."""
		if not overrides:
			return self
		return replace(self, **overrides)

	@classmethod
	def parse(cls, text: str, kind: str, base: "FormatInstruction" = None) -> "FormatInstruction":
		"""Parse text for a value of kind and layer it onto base (or the defaults)."""
		base = base if base is not None else cls()
		return base.merged_with(parse_instruction(text, kind))


def _clean(text: str) -> str:
	return re.sub(r'\s+', ' ', text).strip()


# Bracketed constructs, extracted before anything else. Each maps a regex to a
# function of the match producing overrides. Boolean color pairs come before
# the single color so 'c[red,blue]' is not half-read.
_NIL_TEXT = (re.compile(r'n\[([^\]]*)\]'), lambda m: {'nil_text': _clean(m.group(1))})
_COLOR = (re.compile(r'c\[\s*([-_a-zA-Z0-9#]+)\s*\]'), lambda m: {'color': m.group(1)})
_BOOL_TEXT = (
	re.compile(r'b\[([^\],]*),([^\]]*)\]'),
	lambda m: {'true_text': _clean(m.group(1)), 'false_text': _clean(m.group(2))},
)
_BOOL_COLORS = (
	re.compile(r'c\[\s*([-_a-zA-Z0-9#]+)\s*,\s*([-_a-zA-Z0-9#]+)\s*\]'),
	lambda m: {'true_color': m.group(1), 'false_color': m.group(2)},
)
_DATE_FMT = (re.compile(r'd\[([^\]]*)\]'), lambda m: {'date_fmt': m.group(1)})
_DATETIME_FMT = (re.compile(r'D\[([^\]]*)\]'), lambda m: {'datetime_fmt': m.group(1)})

_BRACKETED = {
	BOOLEAN: (_NIL_TEXT, _BOOL_TEXT, _BOOL_COLORS, _COLOR),
	DATETIME: (_NIL_TEXT, _DATE_FMT, _DATETIME_FMT, _COLOR),
}
_BRACKETED_DEFAULT = (_NIL_TEXT, _COLOR)

_PAD_ROUND_RE = re.compile(r'(\d+)\.(\d+)')

_COMMON_TOKENS = {
	'u': {'case': 'lower'},
	'U': {'case': 'upper'},
	't': {'case': 'title'},
	'B': {'bold': True},
	'I': {'italic': True},
	'L': {'alignment': 'left'},
	'C': {'alignment': 'center'},
	'R': {'alignment': 'right'},
}

_KIND_TOKENS = {
	NUMERIC: {
		',': {'commas': True},
		'$': {'currency': True},
		'H': {'hms': True},
	},
	BOOLEAN: {
		'Y': {'true_text': 'Y', 'false_text': 'N'},
		'T': {'true_text': 'T', 'false_text': 'F'},
		'X': {'true_text': 'X', 'false_text': ''},
	},
}


def parse_instruction(text: str, kind: str) -> Dict[str, Any]:
	"""
	Parse an instruction string for a value of the given kind.

	Returns only the directives present in text, so the result can be
	layered over less specific instructions. Conflicting directives do not
	raise; the last one read wins.

	Raises
	------
	MalformedInstructionError
		If anything in text is not a directive valid for kind

	Examples
	--------
	>>> parse_instruction('B,0.2', 'numeric')
	{'pre_digits': 0, 'post_digits': 2, 'bold': True, 'commas': True}
	>>> parse_instruction('b[Yippers,Nah Sir]', 'boolean')
	{'true_text': 'Yippers', 'false_text': 'Nah Sir'}
	"""
	if kind not in KINDS:
		raise ValueError(f"Unknown kind '{kind}'")
	if text is None:
		return {}

	overrides: Dict[str, Any] = {}
	remaining = str(text)

	# Bracketed text may hold spaces, so these go before whitespace is dropped
	for pattern, extract in _BRACKETED.get(kind, _BRACKETED_DEFAULT):
		for m in pattern.finditer(remaining):
			overrides.update(extract(m))
		remaining = pattern.sub('', remaining)

	remaining = re.sub(r'\s+', '', remaining)

	if kind == NUMERIC:
		for m in _PAD_ROUND_RE.finditer(remaining):
			overrides['pre_digits'] = int(m.group(1))
			overrides['post_digits'] = int(m.group(2))
		remaining = _PAD_ROUND_RE.sub('', remaining)

	tokens = _KIND_TOKENS.get(kind, {})
	leftover = []
	for ch in remaining:
		if ch in tokens:
			overrides.update(tokens[ch])
		elif ch in _COMMON_TOKENS:
			overrides.update(_COMMON_TOKENS[ch])
		else:
			leftover.append(ch)
	if leftover:
		raise MalformedInstructionError(''.join(leftover), kind)
	return overrides
