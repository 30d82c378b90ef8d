# exceptions.py
"""
Error taxonomy for probcore.

Every error is a programmer error surfaced synchronously to the caller. The
concrete classes also derive from the builtin exception that numpy/scipy
users would catch for the same situation (ValueError for bad inputs,
NotImplementedError for statistics without a closed form).
"""
from __future__ import annotations

__all__ = [
    "ProbcoreError",
    "InvalidParameterError",
    "DomainError",
    "UnsupportedOperationError",
]


class ProbcoreError(Exception):
    """Base class for all probcore errors."""


class InvalidParameterError(ProbcoreError, ValueError):
    """A distribution parameter lies outside its domain (negative, NaN, ...)."""


class DomainError(ProbcoreError, ValueError):
    """A special function was evaluated outside its domain."""

    def __init__(self, function: str, message: str) -> None:
        super().__init__(f"{function}: {message}")
        self.function = function


class UnsupportedOperationError(ProbcoreError, NotImplementedError):
    """The requested statistic has no closed form for this distribution."""
