# src/ini_object/naming.py
"""
Naming-convention conversion between declared field names and document keys.
"""

from __future__ import annotations

from typing import List


def camel_to_snake(value: str) -> str:
    """
    Convert a word-capitalized name to a word-underscored document key.

    A new word starts at every uppercase letter that follows a non-empty
    word; every character is lowercased.

    Examples
    --------
    >>> camel_to_snake("appName")
    'app_name'
    >>> camel_to_snake("RestV1")
    'rest_v1'
    >>> camel_to_snake("app_name")
    'app_name'
    """
    parts: List[str] = []
    part = ""
    for char in value:
        if char.isupper() and part:
            parts.append(part)
            part = ""
        part += char
    if part:
        parts.append(part)
    return "_".join(p.lower() for p in parts)


def snake_to_camel(value: str, first_upper: bool = True) -> str:
    """
    Convert a word-underscored document key to a word-capitalized name.

    Examples
    --------
    >>> snake_to_camel("app_name")
    'AppName'
    >>> snake_to_camel("app_name", first_upper=False)
    'appName'
    """
    ret = "".join(p[:1].upper() + p[1:] for p in value.split("_"))
    if first_upper:
        return ret
    return ret[:1].lower() + ret[1:]
