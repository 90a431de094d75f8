"""
repr of PyColumn and PyTable.
"""

from py_table import PyColumn, PyTable


def test_column_repr():
    col = PyColumn('price', ['1', '22'])
    assert repr(col) == "price\n    1\n   22\n\n# 2 element column <numeric>"


def test_string_and_absent_values():
    col = PyColumn('d', ['apple', None])
    lines = repr(col).splitlines()
    assert lines[1].strip() == "'apple'"
    assert lines[2].strip() == '.'


def test_long_column_truncated():
    col = PyColumn('n', [str(k) for k in range(20)])
    lines = repr(col).splitlines()
    assert '...' in [line.strip() for line in lines]
    assert lines[-1] == '# 20 element column <numeric>'


def test_wide_table_truncated():
    tbl = PyTable([{f"c{k}": str(k) for k in range(12)}])
    lines = repr(tbl).splitlines()
    assert '...' in lines[0]
    assert lines[-1].startswith('# 1×12 table <numeric, numeric')
    assert ', ..., ' in lines[-1]


def test_empty_table():
    assert repr(PyTable()) == '# 0×0 table'
