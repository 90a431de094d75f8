import re

from ..formatter import PyFormatter
from ..instruction import FormatInstruction


# Org dates are inactive timestamps
ORG_DATE_FMT = '[%Y-%m-%d]'
ORG_DATETIME_FMT = '[%Y-%m-%d %a %H:%M:%S]'


class OrgFormatter(PyFormatter):
	"""Aligned org-mode table text, readable again with read_org."""

	default_format = FormatInstruction(date_fmt=ORG_DATE_FMT, datetime_fmt=ORG_DATETIME_FMT)
	aligned = True

	def _rule(self, widths):
		return '|' + '+'.join('-' * (w + 2) for w in widths.values()) + '|\n'

	def decorate(self, text, instruction, value=None):
		# a bar inside a cell would end it
		text = text.replace('|', r'\vert{}')
		if not re.search(r'\S', text):
			return text
		if instruction.bold:
			text = f"*{text}*"
		if instruction.italic:
			text = f"/{text}/"
		return text

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
