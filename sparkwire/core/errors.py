from typing import Optional


class SparkwireError(Exception):
    """Base exception for sparkwire."""
    pass


class EncodeError(SparkwireError):
    """Raised when a value graph cannot be turned into a wire payload."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.reason = message
        self.path = path or ""


class UnsupportedKindError(EncodeError):
    """A kind tag outside the recognized set reached a dispatch point."""


class TypeMismatchError(EncodeError):
    """The runtime value does not fit the declared kind."""


class StructuralViolationError(EncodeError):
    """A required structural element is missing or malformed."""


class RangeOverflowError(EncodeError):
    """A value does not fit its declared kind's range."""


class DecodeError(SparkwireError):
    """Raised when wire bytes cannot be turned back into a value graph."""
