import re

import wcwidth
from rich.color import ColorParseError
from rich.style import Style

from ..errors import PyTableValueError
from ..formatter import PyFormatter
from ..instruction import NO_COLOR


_ANSI_RE = re.compile(r'\x1b\[[0-9;]*m')

# Box-drawing characters: double rules above and below the table, single
# rules between groups and footers
BOX_CHARS = {
	"upper_left": "\u2552",
	"upper_right": "\u2555",
	"double_rule": "\u2550",
	"upper_tee": "\u2564",
	"vertical_rule": "\u2502",
	"left_tee": "\u251C",
	"horizontal_rule": "\u2500",
	"single_cross": "\u253C",
	"right_tee": "\u2524",
	"lower_left": "\u2558",
	"lower_right": "\u255B",
	"lower_tee": "\u2567",
}

ASCII_CHARS = {
	"upper_left": "+",
	"upper_right": "+",
	"double_rule": "=",
	"upper_tee": "+",
	"vertical_rule": "|",
	"left_tee": "+",
	"horizontal_rule": "-",
	"single_cross": "+",
	"right_tee": "+",
	"lower_left": "+",
	"lower_right": "+",
	"lower_tee": "+",
}


def _display_width(text: str) -> int:
	"""Terminal columns taken by text, ignoring ANSI escape sequences."""
	width = 0
	for char in _ANSI_RE.sub('', text):
		char_width = wcwidth.wcwidth(char)
		# wcwidth returns -1 for non-printable characters, treat as 0
		if char_width >= 0:
			width += char_width
	return width


class TermFormatter(PyFormatter):
	"""
	Grid for a terminal, drawn with box characters (or ASCII when unicode is
	False), with emphasis and color as ANSI escapes.
	"""

	aligned = True

	def __init__(self, table=None, unicode=True, **kwargs):
		super().__init__(table, **kwargs)
		self.unicode = unicode
		self.chars = BOX_CHARS if unicode else ASCII_CHARS

	def width(self, text):
		return _display_width(text)

	def decorate(self, text, instruction, value=None):
		color = self.cell_color(instruction, value)
		try:
			style = Style(
				color=None if color == NO_COLOR else color,
				bold=instruction.bold or None,
				italic=instruction.italic or None,
			)
		except ColorParseError as e:
			raise PyTableValueError(f"Unknown terminal color '{color}'") from e
		if not style:
			return text
		return style.render(text)

	def _rule(self, widths, left, fill, tee, right):
		c = self.chars
		body = c[tee].join(c[fill] * (w + 2) for w in widths.values())
		return c[left] + body + c[right] + '\n'

	def pre_header(self, widths):
		return self._rule(widths, 'upper_left', 'double_rule', 'upper_tee', 'upper_right')

	def pre_row(self):
		return self.chars['vertical_rule']

	def pre_cell(self):
		return ' '

	def post_cell(self):
		return ' '

	def inter_cell(self):
		return self.chars['vertical_rule']

	def post_row(self):
		return self.chars['vertical_rule'] + '\n'

	def hline(self, widths):
		return self._rule(widths, 'left_tee', 'horizontal_rule', 'single_cross', 'right_tee')

	def post_footers(self, widths):
		return self._rule(widths, 'lower_left', 'double_rule', 'lower_tee', 'lower_right')
