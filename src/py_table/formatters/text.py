from ..formatter import PyFormatter


class TextFormatter(PyFormatter):
	"""Aligned plain text with '|' between cells and '+---+' rules."""

	aligned = True

	def _rule(self, widths):
		return '+' + '+'.join('-' * (w + 2) for w in widths.values()) + '+\n'

	def pre_header(self, widths):
		return self._rule(widths)

	def pre_row(self):
		return '|'

	def pre_cell(self):
		return ' '

	def post_cell(self):
		return ' '

	def post_row(self):
		return '|\n'

	def hline(self, widths):
		return self._rule(widths)

	def post_footers(self, widths):
		return self._rule(widths)
