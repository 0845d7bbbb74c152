from __future__ import annotations


class LidError(Exception):
    """
    Base error class for vocabulary-lid.

    Callers can catch LidError for SDK-level issues while still preserving compatibility with
    built-in exception types via multiple inheritance.
    """


class InvalidConfigError(ValueError, LidError):
    """
    Raised when a user-provided config/argument is invalid.

    Subclasses ValueError for backward compatibility.
    """


class DatasetError(ValueError, LidError):
    """
    Raised when a labeled dataset cannot be read (missing header, missing columns, bad format).
    """


class InvalidWordError(ValueError, LidError):
    """Raised when a word is empty after normalization or falls outside the language alphabet."""
