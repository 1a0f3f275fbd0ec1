"""Parsing exceptions.

These never escape the parsing helpers' public entry points; they are
raised internally and turned into defaults or ``DecodeResult`` errors.
"""

from __future__ import annotations


class ParsingError(Exception):
    """Base exception for parsing errors."""


class FieldDecodeError(ParsingError):
    """Raised when a stored field cannot be decoded into a list of strings."""
