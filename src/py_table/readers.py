"""Loading PyTables from CSV and org-mode text."""

from __future__ import annotations
import csv
import logging
import os
import re
import warnings
from pathlib import Path

from .errors import PyTableValueError
from .table import PyTable


logger = logging.getLogger(__name__)

_TABLE_LINE_RE = re.compile(r'\A\s*\|')
_RULE_LINE_RE = re.compile(r'\A\s*\|[-+]+')

FORMATS = ('csv', 'org')


def read_csv(io, cls=PyTable):
	"""
	Read a table from a CSV text stream.

	The first row supplies the headers; blank lines are skipped.
	"""
	tbl = cls()
	for record in csv.DictReader(io):
		# DictReader files surplus fields under the None key
		tbl.add_row({k: v for k, v in record.items() if k is not None})
	if tbl.is_empty():
		warnings.warn("CSV source contains no data rows; returning an empty table", stacklevel=2)
	logger.debug("read %d rows from csv", len(tbl))
	return tbl


def _org_rows(lines):
	"""Cell lists of the first org table among lines, rule lines omitted."""
	rows = []
	table_found = False
	header_found = False
	for line in lines:
		if not table_found:
			if not _TABLE_LINE_RE.match(line):
				continue
			table_found = True
		if not _TABLE_LINE_RE.match(line):
			break
		if _RULE_LINE_RE.match(line):
			if header_found:
				break
			header_found = True
			continue
		line = re.sub(r'\A\s*\|', '', line.rstrip('\r\n'))
		line = re.sub(r'\|\s*\Z', '', line)
		rows.append([cell.strip() for cell in line.split('|')])
	return table_found, rows


def read_org(io, cls=PyTable):
	"""
	Read the first table found in org-mode text.

	Lines before the table are skipped. The first rule line divides the
	header row from the body; a second rule line or the first line that is
	not part of the table ends reading.
	"""
	table_found, rows = _org_rows(io)
	if not table_found:
		warnings.warn("org source contains no table; returning an empty table", stacklevel=2)
		return cls()
	tbl = cls.from_aoa(rows)
	logger.debug("read %d rows from org table", len(tbl))
	return tbl


def _format_of(source, fmt):
	if fmt is not None:
		fmt = fmt.lower().lstrip('.')
	elif isinstance(source, (str, os.PathLike)):
		fmt = Path(source).suffix.lower().lstrip('.')
	else:
		raise PyTableValueError("Reading a table from a stream requires a format hint ('csv' or 'org')")
	if fmt not in FORMATS:
		raise PyTableValueError(f"Don't know how to read a '{fmt}' table")
	return fmt


def read_table(source, fmt=None, cls=PyTable):
	"""
	Read a PyTable from a path or a text stream.

	Args:
		source: path (str or PathLike) or an open text stream
		fmt: 'csv' or 'org'; taken from the path's extension when omitted

	Example:
		>>> tbl = read_table('trades.csv')
		>>> tbl = read_table(io.StringIO(text), 'org')
	"""
	fmt = _format_of(source, fmt)
	reader = read_csv if fmt == 'csv' else read_org
	if isinstance(source, (str, os.PathLike)):
		with open(source, newline='', encoding='utf-8') as io:
			return reader(io, cls)
	return reader(source, cls)
