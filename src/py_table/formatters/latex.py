import re

from ..formatter import PyFormatter
from ..instruction import NO_COLOR


PREAMBLE = "\\usepackage{longtable}\n\\usepackage[pdftex,x11names]{xcolor}\n"

_TEX_SPECIALS = {
	'\\': r'\textbackslash{}',
	'^': r'\textasciicircum{}',
	'~': r'\textasciitilde{}',
	'|': r'\textbar{}',
	'<': r'\textless{}',
	'>': r'\textgreater{}',
	'{': r'\{',
	'}': r'\}',
	'_': r'\_',
	'$': r'\$',
	'&': r'\&',
	'%': r'\%',
	'#': r'\#',
}
_TEX_SPECIALS_RE = re.compile('|'.join(re.escape(ch) for ch in _TEX_SPECIALS))

_ALIGNMENT_SPEC = {'left': 'l', 'center': 'c', 'right': 'r'}


def tex_quote(text: str) -> str:
	"""Escape characters special to TeX."""
	return _TEX_SPECIALS_RE.sub(lambda m: _TEX_SPECIALS[m.group(0)], text)


def _quote_for_decorate(text):
	# straight quotes become TeX's curly quotes
	text = re.sub(r"'([^']*)'", r"`\1'", text)
	text = re.sub(r'"([^"]*)"', r"``\1''", text)
	return tex_quote(text)


class LaTeXFormatter(PyFormatter):
	"""A longtable environment; needs the packages in PREAMBLE."""

	@staticmethod
	def preamble():
		return PREAMBLE

	def decorate(self, text, instruction, value=None):
		text = _quote_for_decorate(text)
		color = self.cell_color(instruction, value)
		commands = ''
		if instruction.bold:
			commands += '\\bfseries'
		if instruction.italic:
			commands += '\\itshape'
		if color != NO_COLOR:
			commands += f"\\color{{{color}}}"
		if not commands:
			return text
		return f"{{{commands}{{{text}}}}}"

	def pre_table(self, widths):
		spec = ''.join(
			_ALIGNMENT_SPEC[self.instruction_for('body', h, col.kind).alignment]
			for h, col in zip(self.table.headers, self.table.columns)
		)
		return f"\\begin{{longtable}}{{{spec}}}\n"

	def post_table(self, widths):
		return "\\end{longtable}\n"

	def post_header(self, widths):
		return "\\endhead\n"

	def inter_cell(self):
		return "&\n"

	def post_row(self):
		return "\\\\\n"
