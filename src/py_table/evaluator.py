"""Expression evaluation for PyTable.select and PyTable.where.

Expressions are ordinary Python expressions over the fields of a row. Names
prefixed with ``@`` refer to evaluator-level variables that persist from one
evaluation to the next, which is how the row ordinal (``@row``) and running
values set by the ``before``/``after`` hooks are reached.
"""

from __future__ import annotations
import io
import logging
import re
import tokenize
from datetime import date, datetime, timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Mapping, Optional

from .coerce import to_datetime, to_numeric
from .errors import PyTableValueError


logger = logging.getLogger(__name__)

_SAFE_BUILTINS = {
	'abs': abs, 'all': all, 'any': any, 'bool': bool, 'int': int,
	'len': len, 'max': max, 'min': min, 'round': round, 'str': str,
	'sum': sum, 'True': True, 'False': False, 'None': None,
}

# Helpers visible to every expression; row fields of the same name shadow them
_HELPERS = {
	'Decimal': Decimal,
	'Fraction': Fraction,
	'date': date,
	'datetime': datetime,
	'timedelta': timedelta,
	'parse_date': to_datetime,
	'parse_number': to_numeric,
	're': re,
}


def _rewrite(source: str) -> str:
	"""Turn each @name token into an __ivars__ lookup; string literals are left alone."""
	try:
		tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))
	except (tokenize.TokenError, SyntaxError):
		# compile() reports the error with a better message
		return source

	line_starts = [0]
	for line in source.splitlines(keepends=True):
		line_starts.append(line_starts[-1] + len(line))

	def offset(pos):
		return line_starts[pos[0] - 1] + pos[1]

	parts = []
	last = 0
	for tok, nxt in zip(tokens, tokens[1:]):
		if (tok.type == tokenize.OP and tok.string == '@'
				and nxt.type == tokenize.NAME and nxt.start == tok.end):
			parts.append(source[last:offset(tok.start)])
			parts.append(f"__ivars__[{nxt.string!r}]")
			last = offset(nxt.end)
	parts.append(source[last:])
	return ''.join(parts)


class Evaluator():
	"""
	Evaluate string expressions against per-row local variables.

	Args:
		ivars: initial values of the @-variables
		before: statement run before each evaluation (may assign @-variables)
		after: statement run after each evaluation

	Example:
		>>> ev = Evaluator(ivars={'total': 0}, after='@total = @total + x')
		>>> ev.evaluate('x * 2', {'x': 3})
		6
		>>> ev.ivars['total']
		3
	"""

	def __init__(self, ivars: Optional[Mapping[str, Any]] = None, before=None, after=None):
		self.ivars: Dict[str, Any] = dict(ivars or {})
		self._before = self._compile(before, 'exec') if before else None
		self._after = self._compile(after, 'exec') if after else None
		self._cache = {}

	@staticmethod
	def _compile(source: str, mode: str):
		try:
			return compile(_rewrite(source), '<expression>', mode)
		except SyntaxError as e:
			raise PyTableValueError(f"Invalid expression '{source}': {e.msg}") from e

	def _namespace(self, local_vars):
		ns = dict(_HELPERS)
		if local_vars:
			ns.update(local_vars)
		ns['__builtins__'] = _SAFE_BUILTINS
		ns['__ivars__'] = self.ivars
		return ns

	def evaluate(self, expr: str, local_vars: Optional[Mapping[str, Any]] = None):
		"""Run the before hook, evaluate expr, run the after hook; return expr's value."""
		code = self._cache.get(expr)
		if code is None:
			code = self._cache[expr] = self._compile(expr, 'eval')
			logger.debug("compiled expression %r", expr)

		ns = self._namespace(local_vars)
		if self._before is not None:
			exec(self._before, ns)
		result = eval(code, ns)
		if self._after is not None:
			exec(self._after, ns)
		return result
