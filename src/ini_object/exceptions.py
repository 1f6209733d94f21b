# src/ini_object/exceptions.py
"""
Custom exceptions for ini_object.

All exceptions inherit from IniObjectError so that callers can catch
gateway-specific errors without grabbing unrelated built-in exceptions.
"""


class IniObjectError(Exception):
    """Base class for all ini_object exceptions."""

    pass


class ParseError(IniObjectError):
    """Raised when INI text cannot be parsed into a document."""

    pass


class ConfigIOError(IniObjectError, OSError):
    """Raised when a config file is missing, unreadable or unwritable."""

    pass


class CoercionError(IniObjectError, ValueError):
    """Raised when a document value cannot be converted to a field's type."""

    pass
