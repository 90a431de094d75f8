from ..formatter import PyFormatter


class AoaFormatter(PyFormatter):
	"""
	Render as a list of rows of strings, the shape org-babel turns into an
	org table. None entries mark horizontal rules.
	"""

	def assemble(self, header, rows, widths):
		result = []
		if self.include_header_row and header:
			result.append(list(header.values()))
		for row in rows:
			result.append(None if row is None else list(row.values()))
		return result
