import pytest
from py_table import PyTable, PyColumn
from py_table.errors import (
    PyTableError,
    PyTableKeyError,
    PyTableTypeError,
    PyTableValueError,
    TypeConflictError,
    UnknownKeyError,
)


def test_missing_column_raises_pytable_keyerror():
    t = PyTable([{'a': 1, 'b': 3}])
    with pytest.raises(PyTableKeyError):
        _ = t['missing']
    with pytest.raises(KeyError):
        _ = t['missing']


def test_type_conflict_is_a_type_error():
    col = PyColumn('a', ['1'])
    with pytest.raises(TypeError):
        col.append('x')


def test_library_errors_share_a_base():
    for cls in (PyTableKeyError, PyTableTypeError, PyTableValueError, TypeConflictError, UnknownKeyError):
        assert issubclass(cls, PyTableError)


def test_order_by_without_keys_raises_pytable_valueerror():
    t = PyTable([{'a': 1}])
    with pytest.raises(PyTableValueError):
        t.order_by()
    with pytest.raises(ValueError):
        t.order_by()
