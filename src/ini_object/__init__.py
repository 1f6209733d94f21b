# src/ini_object/__init__.py
"""
ini_object: map flat INI configuration text onto declared Python classes.

This package provides:
- A Gateway that loads INI text into dataclasses, pydantic models or plain
  classes, and saves such instances back to INI text.
- A small INI codec for the two-level (top-level keys + sections) model.
- A CLI for parsing, rendering and describing config classes.
"""

from __future__ import annotations

from .exceptions import CoercionError, ConfigIOError, IniObjectError, ParseError
from .gateway import Gateway

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "CoercionError",
    "ConfigIOError",
    "Gateway",
    "IniObjectError",
    "ParseError",
]
