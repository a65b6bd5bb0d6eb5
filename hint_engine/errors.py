"""Exceptions raised for precondition violations in the hint engine."""

# errors.py
# Both are ValueError subclasses: they flag a programming error in a caller
# or a detector. "No hint found" is never an error; detectors return None.


class GivenCellError(ValueError):
    """Raised when something tries to change a given cell or its pencil marks."""


class InvalidHintError(ValueError):
    """Raised when a hint is constructed with an inconsistent shape."""
