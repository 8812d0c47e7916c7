"""Exceptions."""

from __future__ import annotations


class InvalidClassError(ValueError):
    """Raised when an orbital index is given an unknown orbital class."""

    pass


class UnsupportedExpressionError(TypeError):
    """Raised when an operation is not defined for the type of expression it is given."""

    pass
