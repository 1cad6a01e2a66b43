"""Exception types raised by the OBJ ingestion core."""

from __future__ import annotations


class ObjParseError(ValueError):
    """Raised when OBJ text cannot be turned into a mesh at all."""


class EmptyInputError(ObjParseError):
    """Raised when the input text has zero length."""


class MalformedTokenError(ObjParseError):
    """Raised in strict mode when a numeric or index token does not parse."""

    def __init__(self, line_number: int, token: str, message: str):
        self.line_number = line_number
        self.token = token
        super().__init__(f"line {line_number}: {message} ({token!r})")


class PositionIndexError(IndexError):
    """Raised when a vertex key references a position that does not exist."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"position index {index} out of range (0..{count - 1})")


class UnparseableInputError(ObjParseError):
    """Raised when non-empty input yields no triangles and only diagnostics."""

    def __init__(self, diagnostic_count: int):
        self.diagnostic_count = diagnostic_count
        super().__init__(
            f"no triangles could be read ({diagnostic_count} diagnostics)"
        )
