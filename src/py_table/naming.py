"""Column header normalization and display utilities."""

from __future__ import annotations
import re


_LITTLE_WORDS = frozenset((
	'a', 'an', 'the', 'at', 'for', 'up', 'and', 'but',
	'or', 'nor', 'in', 'on', 'under', 'of', 'from', 'as', 'by', 'to',
))


def _clean(text: str) -> str:
	"""Strip the ends and squeeze interior runs of spaces."""
	return re.sub(r' +', ' ', text.strip())


def _normalize_header(name) -> str | None:
	"""Normalize a raw header to a column name.

	Rules:
	- Strip and squeeze whitespace
	- Replace runs of whitespace with a single _
	- Remove anything that is not alphanumeric or _
	- Convert to lowercase
	- Return None if empty after normalization
	"""
	if not isinstance(name, str):
		name = str(name)

	name = _clean(name)
	name = re.sub(r'\s+', '_', name)
	name = re.sub(r'[^_A-Za-z0-9]', '', name)
	name = name.lower()

	if name == "":
		return None
	return name


def _auto_headers(count: int) -> list[str]:
	"""Headers for tables read without a header row: col1, col2, ..."""
	return [f"col{k}" for k in range(1, count + 1)]


def _entitle(text: str) -> str:
	"""Title-case text, leaving little words lower-case except at the ends.

	Acronyms (words already all upper-case) are preserved unless the whole
	string is upper-case.
	"""
	words = text.split()
	if not words:
		return text
	preserve_acronyms = text.upper() != text
	last_k = len(words) - 1
	out = []
	for k, w in enumerate(words):
		if preserve_acronyms and len(w) > 1 and w.isupper():
			out.append(w)
		elif 0 < k < last_k and w.lower() in _LITTLE_WORDS:
			out.append(w.lower())
		elif w[0].isdigit():
			out.append(w.lower())
		else:
			out.append(w[0].upper() + w[1:].lower())
	return ' '.join(out)


def _header_label(header: str) -> str:
	"""Display form of a normalized header: 'two_words' -> 'Two Words'."""
	return ' '.join(w.capitalize() for w in header.split('_') if w)
