"""Exceptions shared by the boarding modules."""


class ValidationError(RuntimeError):
    """Raised when incoming data fails validation."""
