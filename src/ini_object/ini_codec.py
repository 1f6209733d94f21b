# src/ini_object/ini_codec.py
"""
INI text codec for the flat two-level model.

Provides:
- parse_ini: raw INI text -> Document (top-level keys plus one level of sections)
- serialize_lines: emitted lines -> INI text

Only lines starting with ";" are comments. Values are scanned raw: no inline
comments, no multiline continuation and no type interpretation. Every scalar
comes back as a string.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Sequence, Union

from .exceptions import ParseError

Scalar = Union[str, int, float, bool]
ConfigValue = Union[Scalar, None, List[Scalar], Dict[str, Any]]
Document = Dict[str, ConfigValue]

COMMENT_PREFIX = ";"

# "name[]" or "name[sub]"
_ARRAY_KEY = re.compile(r"^(?P<base>[^\[\]]+?)\s*\[(?P<sub>[^\[\]]*)\]$")


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _store(target: Dict[str, Any], key: str, value: str, lineno: int) -> None:
    """Store a key/value pair, expanding "name[]" and "name[sub]" keys."""
    if "[" not in key and "]" not in key:
        target[key] = value
        return

    m = _ARRAY_KEY.match(key)
    if m is None:
        raise ParseError(f"line {lineno}: malformed array key {key!r}")

    base = m.group("base").strip()
    sub = m.group("sub").strip()
    current = target.get(base)

    if sub == "":
        if isinstance(current, list):
            current.append(value)
        elif isinstance(current, dict):
            current[str(len(current))] = value
        else:
            target[base] = [value]
        return

    if isinstance(current, list):
        # promote to a keyed array on the first named entry
        current = {str(i): v for i, v in enumerate(current)}
        target[base] = current
    elif not isinstance(current, dict):
        current = {}
        target[base] = current
    current[sub] = value


def parse_ini(raw: str) -> Document:
    """
    Parse INI text into a two-level document.

    Parameters
    ----------
    raw : str
        INI text. Top-level "key = value" lines may precede the first
        "[section]" header.

    Returns
    -------
    Document
        Mapping of top-level keys to values and of section names to flat
        mappings of keys to values. Sections never nest.

    Raises
    ------
    TypeError
        If raw is not a string.
    ParseError
        If a line is neither blank, a comment, a section header nor a
        key/value pair.
    """
    if not isinstance(raw, str):
        raise TypeError(f"raw must be str, got {type(raw).__name__}")

    doc: Document = {}
    current: Dict[str, Any] = doc

    text = raw[1:] if raw.startswith("\ufeff") else raw
    for lineno, line in enumerate(text.splitlines(), start=1):
        s = line.strip()
        if not s or s.startswith(COMMENT_PREFIX):
            continue

        if s.startswith("["):
            if not s.endswith("]"):
                raise ParseError(f"line {lineno}: unterminated section header {s!r}")
            name = s[1:-1].strip()
            if not name:
                raise ParseError(f"line {lineno}: empty section name")
            section = doc.get(name)
            if not isinstance(section, dict):
                section = {}
                doc[name] = section
            current = section
            continue

        if "=" not in s:
            raise ParseError(f"line {lineno}: expected 'key = value' or '[section]'")

        key, value = s.split("=", 1)
        key = key.strip()
        if not key:
            raise ParseError(f"line {lineno}: missing key before '='")
        _store(current, key, _unquote(value.strip()), lineno)

    return doc


def serialize_lines(lines: Sequence[str]) -> str:
    """
    Join emitted lines into INI text with a trailing newline.

    Parameters
    ----------
    lines : Sequence[str]
        Lines in output order. Entries may themselves contain newlines.

    Returns
    -------
    str
        Full INI text.
    """
    return "\n".join(lines) + "\n"
