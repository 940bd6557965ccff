"""
Exceptions raised by pullstream.
"""


class StreamError(Exception):
    """Base class for pipeline errors."""


class StreamTypeError(StreamError, TypeError):
    """An element or source does not have the type the caller declared."""

    def __init__(self, message: str, value=None, expected=None):
        super().__init__(message)
        self.value = value
        self.expected = expected
