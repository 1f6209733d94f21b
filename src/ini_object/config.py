# src/ini_object/config.py
"""
Configuration utilities for ini_object.

Provides a simple dataclass-based configuration object for the Gateway's
text tokens and a loader that reads YAML configuration files when present.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml


@dataclass(frozen=True)
class GatewayConfig:
    """
    Immutable gateway configuration.

    Attributes
    ----------
    null_token : str
        Text standing for None in nullable fields (case-sensitive).
    array_separator : str
        Separator splitting a plain value into array elements on load.
        Elements are joined with the separator plus one space on save.
    true_tokens : Tuple[str, ...]
        Exact texts that load as True into bool fields; anything else is False.
    encoding : str
        Text encoding used for file reads and writes.
    """

    null_token: str = "null"
    array_separator: str = ","
    true_tokens: Tuple[str, ...] = ("1", "true", "on", "yes")
    encoding: str = "utf-8"


def load_config(path: Optional[Path]) -> GatewayConfig:
    """
    Load gateway configuration from a YAML file.

    Parameters
    ----------
    path : Path or None
        Path to a YAML config file. If None, defaults are used.

    Returns
    -------
    GatewayConfig
        The loaded configuration. All values are read as text. Keys missing
        from the file keep their defaults; unknown keys are ignored.

    Raises
    ------
    TypeError
        If the YAML file does not parse to a mapping at the top level, or
        true_tokens is not a list, or a token is not plain text.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    if path is None:
        return GatewayConfig()

    # BaseLoader keeps every scalar as text, so tokens such as yes, on or null
    # are not resolved to Python bools or None
    data: Any = yaml.load(path.read_text(), Loader=yaml.BaseLoader)

    if data is None:
        return GatewayConfig()

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Config file must contain a mapping at top level, "
            f"got {type(data).__name__}. "
            f"Config file: {path}"
        )

    defaults = GatewayConfig()
    tokens = data.get("true_tokens", defaults.true_tokens)
    if not isinstance(tokens, (list, tuple)):
        raise TypeError(
            f"true_tokens must be a list, got {type(tokens).__name__}. "
            f"Config file: {path}"
        )

    values = {
        name: data.get(name, getattr(defaults, name))
        for name in ("null_token", "array_separator", "encoding")
    }
    for name, value in [*values.items(), *(("true_tokens", t) for t in tokens)]:
        if not isinstance(value, str):
            raise TypeError(
                f"{name} must hold plain text values, got {type(value).__name__}. "
                f"Config file: {path}"
            )

    return GatewayConfig(true_tokens=tuple(tokens), **values)
