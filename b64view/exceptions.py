"""`b64view` module exceptions."""


class B64ViewException(Exception): ...


class InvalidSeek(B64ViewException, ValueError):
    """Raised when a seek would move the cursor to a negative or out of range position."""


class RangeNotSatisfiable(B64ViewException, ValueError):
    """Raised when a byte range specifier is malformed or lies outside the stream."""
