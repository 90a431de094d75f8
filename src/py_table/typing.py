"""
DataType system for PyColumn / PyTable.

Pure metadata design:
  - DataType describes a column's kind (nil, boolean, datetime, numeric, string)
  - Values live on PyColumn instances, not in DataType
  - Fixing a kind is functional (immutable DataType instances)
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any, Iterable, Optional


NIL = "nil"
BOOLEAN = "boolean"
DATETIME = "datetime"
NUMERIC = "numeric"
STRING = "string"

KINDS = (NIL, BOOLEAN, DATETIME, NUMERIC, STRING)

# Python representations accepted for each kind
NUMERIC_TYPES = (int, Decimal, Fraction)
TEMPORAL_TYPES = (date, datetime)


@dataclass(frozen=True)
class DataType:
    """
    Describes the kind of a PyColumn.

    Attributes
    ----------
    kind : str
        One of 'nil', 'boolean', 'datetime', 'numeric', 'string'

    Notes
    -----
    - 'nil' means the column has only seen absent values and its kind is open
    - Fixing never mutates; always returns new DataType
    - 'numeric' is one kind with several representations (int, Decimal, Fraction)

    Examples
    --------
    >>> DataType()
    <nil>
    >>> DataType().fixed_by(3)
    <numeric>
    >>> DataType(NUMERIC).fixed_by(None)
    <numeric>
    """

    kind: str = NIL

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown column kind '{self.kind}'")

    def __repr__(self):
        return f"<{self.kind}>"

    @property
    def is_open(self) -> bool:
        """True while no non-absent value has fixed the kind."""
        return self.kind == NIL

    @property
    def is_numeric(self) -> bool:
        return self.kind == NUMERIC

    @property
    def is_temporal(self) -> bool:
        return self.kind == DATETIME

    def fixed_by(self, value: Any) -> "DataType":
        """
        Return the DataType after a coerced value has been stored.

        Absent values never change the kind, and a fixed kind never changes.
        """
        if value is None or not self.is_open:
            return self
        return DataType(infer_kind(value))

    def accepts(self, other: "DataType") -> bool:
        """True if columns of the two kinds may be combined."""
        return self.is_open or other.is_open or self.kind == other.kind


def infer_kind(value: Any) -> Optional[str]:
    """
    Infer the kind of a single (already coerced) scalar.

    Returns 'nil' for None and None for values of no supported kind.
    """
    if value is None:
        return NIL

    # Check bool BEFORE numeric (bool is subclass of int)
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (NUMERIC_TYPES + (float,))):
        return NUMERIC
    if isinstance(value, TEMPORAL_TYPES):
        return DATETIME
    if isinstance(value, str):
        return STRING

    return None


def infer_dtype(values: Iterable[Any]) -> DataType:
    """
    Infer a DataType from an iterable of coerced scalars.

    The first non-absent value decides.

    Examples
    --------
    >>> infer_dtype([None, 1, 2])
    <numeric>
    >>> infer_dtype([None, None])
    <nil>
    """
    dtype = DataType()
    for v in values:
        dtype = dtype.fixed_by(v)
        if not dtype.is_open:
            break
    return dtype
