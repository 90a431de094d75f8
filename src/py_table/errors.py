class PyTableError(Exception):
    """Base exception for py-table library."""
    pass


class PyTableKeyError(PyTableError, KeyError):
    """Raised when a column/key is missing."""
    pass


class PyTableTypeError(PyTableError, TypeError):
    """Raised for invalid types in API calls."""
    pass


class PyTableValueError(PyTableError, ValueError):
    """Raised for invalid values or mismatched lengths."""
    pass


class TypeConflictError(PyTableTypeError):
    """Raised when a value cannot be coerced to a column's fixed kind."""

    def __init__(self, column, value, kind):
        self.column = column
        self.value = value
        self.kind = kind
        super().__init__(
            f"Attempt to add {value!r} to column '{column}' already typed as {kind}"
        )


class MalformedInstructionError(PyTableValueError):
    """Raised when a formatting instruction has unrecognized leftovers."""

    def __init__(self, leftover, kind):
        self.leftover = leftover
        self.kind = kind
        super().__init__(
            f"unrecognized {kind} formatting instructions '{leftover}'"
        )


class UnknownLocationError(PyTableValueError):
    """Raised for a format location outside the known set."""

    def __init__(self, location):
        self.location = location
        super().__init__(f"unknown format location '{location}'")


class UnknownKeyError(PyTableKeyError):
    """Raised for format keys that are neither columns nor type keys."""

    def __init__(self, location, keys):
        self.location = location
        self.keys = tuple(keys)
        super().__init__(
            f"invalid {location} column or type: {', '.join(self.keys)}"
        )


class ShapeMismatchError(PyTableValueError):
    """Raised when tables with different column counts are combined."""
    pass


class KindMismatchError(PyTableTypeError):
    """Raised when columns of different kinds are combined."""
    pass


class UnsupportedValueKindError(PyTableTypeError):
    """Raised when a value of an unsupported type is formatted."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"cannot format value {value!r} of class {type(value).__name__}"
        )


class HeaderCollisionError(PyTableValueError):
    """Raised when two different headers normalize to the same name."""
    pass
