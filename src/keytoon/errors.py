"""Exceptions raised by keytoon.

Each error also derives from the built-in exception family callers would
already catch for that kind of failure.
"""


class ToonError(Exception):
    """Base class for all keytoon errors."""


class InvalidJsonError(ToonError, ValueError):
    """Raw JSON text handed to the encoder could not be parsed."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


class ToonEncodeError(ToonError, ValueError):
    """A value cannot be written as TOON that reads back the same (strict mode)."""


class ToonSyntaxError(ToonError, SyntaxError):
    """Malformed or ambiguous TOON text (strict mode)."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ToonDepthError(ToonError, RecursionError):
    """Nesting exceeded the configured maximum depth."""

    def __init__(self, depth: int, max_depth: int):
        super().__init__(f"Nesting depth {depth} exceeds maximum of {max_depth}")
        self.depth = depth
        self.max_depth = max_depth
