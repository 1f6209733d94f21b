# src/ini_object/gateway.py
"""
Gateway for loading and saving config objects as INI text.

Provides:
- Gateway.load_from_file / load_from_string / load_from_mapping
- Gateway.save_to_file / save_to_string

Loading maps document keys onto declared fields by name (appName <-> app_name)
and converts values by declared kind. Saving writes top-level fields first,
then one "[section]" per nested object. INI has two levels only: nested
objects below the first section level are not written.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union

from .coercion import ValueCoercer
from .config import GatewayConfig
from .exceptions import CoercionError, ConfigIOError, ParseError
from .ini_codec import parse_ini, serialize_lines
from .introspect import FieldDescriptor, FieldKind, StructuralType, describe

LOG = logging.getLogger(__name__)

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]

# top level plus one level of sections
MAX_LEVEL = 2

_MISSING = object()


class Gateway:
    """
    Load and save config objects.

    Parameters
    ----------
    config : GatewayConfig or None, default None
        Text tokens used for null, arrays and booleans. Defaults are used
        if None.
    """

    def __init__(self, config: Optional[GatewayConfig] = None) -> None:
        self.config = config or GatewayConfig()
        self._coercer = ValueCoercer(self.config)

    # --------------------------------------------------------------------------
    # load
    # --------------------------------------------------------------------------

    def load_from_file(self, path: PathLike, cls: Type[T]) -> Optional[T]:
        """
        Load a config object from an INI file.

        Parameters
        ----------
        path : str or PathLike
            Readable regular file.
        cls : type
            Class of the object to create and fill.

        Returns
        -------
        object or None
            Filled instance, or None if cls cannot be instantiated without
            arguments (abstract classes, protocols, required init arguments).

        Raises
        ------
        ConfigIOError
            If the path is not an existing, readable regular file.
        ParseError
            If the file cannot be decoded or parsed.
        CoercionError
            If a value cannot be converted to its field's declared type.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigIOError(f"file does not exist: {path}")
        if not path.is_file():
            raise ConfigIOError(f"not a file: {path}")
        if not os.access(path, os.R_OK):
            raise ConfigIOError(f"file is not readable: {path}")

        try:
            text = path.read_text(encoding=self.config.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"failed to decode {path}: {e}") from e
        except OSError as e:
            raise ConfigIOError(f"failed to read {path}: {e}") from e

        try:
            values = parse_ini(text)
        except ParseError as e:
            raise ParseError(f"failed to parse {path}: {e}") from e

        LOG.debug("Loaded %d top-level keys from %s", len(values), path)
        return self.load_from_mapping(values, cls)

    def load_from_string(self, text: str, cls: Type[T]) -> Optional[T]:
        """
        Load a config object from INI text.

        Raises
        ------
        TypeError
            If text is not a string.
        ParseError
            If the text cannot be parsed.
        CoercionError
            If a value cannot be converted to its field's declared type.
        """
        return self.load_from_mapping(parse_ini(text), cls)

    def load_from_mapping(self, values: Mapping, cls: Type[T]) -> Optional[T]:
        """
        Load a config object from an already parsed document.

        Parameters
        ----------
        values : Mapping
            Top-level keys to values, and section names to mappings.
        cls : type
            Class of the object to create and fill.

        Returns
        -------
        object or None
            Filled instance, or None if cls is not instantiable.

        Raises
        ------
        TypeError
            If values is not a mapping or cls is not a class.
        CoercionError
            If a value cannot be converted to its field's declared type.
        """
        if not isinstance(values, Mapping):
            raise TypeError(f"values must be a mapping, got {type(values).__name__}")
        return self._map_document(values, cls)

    def _map_document(self, values: Mapping, cls: Type[T]) -> Optional[T]:
        stype = describe(cls)
        if not stype.instantiable:
            LOG.debug("%s is not instantiable; nothing loaded", stype.name)
            return None

        obj = cls()
        for field in stype.fields:
            if field.key in values:
                self._import_value(obj, field, values[field.key])

        known = {f.key for f in stype.fields}
        unmapped = [str(k) for k in values if k not in known]
        if unmapped:
            LOG.debug(
                "Ignoring keys unknown to %s: %s", stype.name, ", ".join(unmapped)
            )
        return obj

    def _import_value(self, obj: Any, field: FieldDescriptor, raw: Any) -> None:
        if field.setter is not None:
            field.setter(obj, raw)
            return
        if not field.public:
            LOG.debug("Skipping non-public field %r", field.name)
            return
        if field.kind is FieldKind.UNTYPED:
            setattr(obj, field.name, raw)
            return
        if self._coercer.is_null(field, raw):
            setattr(obj, field.name, None)
            return

        if field.kind is FieldKind.NESTED:
            if not isinstance(raw, Mapping):
                raise CoercionError(
                    f"field {field.name!r}: expected section [{field.key}], "
                    f"got {type(raw).__name__}"
                )
            nested = self._map_document(raw, field.nested)
            if nested is not None or field.nullable:
                setattr(obj, field.name, nested)
            return

        setattr(obj, field.name, self._coercer.to_python(field, raw))

    # --------------------------------------------------------------------------
    # save
    # --------------------------------------------------------------------------

    def save_to_file(self, path: PathLike, obj: Any) -> bool:
        """
        Save a config object to an existing INI file, replacing its content.

        Parameters
        ----------
        path : str or PathLike
            Existing, writable regular file.
        obj : object
            Config object to save.

        Returns
        -------
        bool
            True once the file is written.

        Raises
        ------
        ConfigIOError
            If the path does not exist, is not a regular file or is not
            writable.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigIOError(f"file does not exist: {path}")
        if not path.is_file():
            raise ConfigIOError(f"not a file: {path}")
        if not os.access(path, os.W_OK):
            raise ConfigIOError(f"file is not writable: {path}")

        text = self.save_to_string(obj)
        try:
            path.write_text(text, encoding=self.config.encoding)
        except OSError as e:
            raise ConfigIOError(f"failed to write {path}: {e}") from e

        LOG.debug("Wrote %s", path)
        return True

    def save_to_string(self, obj: Any) -> str:
        """
        Export a config object to INI text.

        Parameters
        ----------
        obj : object
            Config object to save.

        Returns
        -------
        str
            Full INI text with a trailing newline. The class docstring's
            first line becomes a header comment, and field titles become
            comments above their values.

        Raises
        ------
        TypeError
            If obj is a class or None.
        """
        if obj is None or isinstance(obj, type):
            raise TypeError(f"obj must be a config instance, got {obj!r}")

        stype = describe(type(obj))
        lines: List[str] = []
        if stype.title:
            lines.append(";\n; " + stype.title)
        self._export_object(obj, stype, lines, 1)
        return serialize_lines(lines)

    def _export_object(
        self, obj: Any, stype: StructuralType, lines: List[str], level: int
    ) -> None:
        if level > MAX_LEVEL:
            return

        sections: List[Tuple[FieldDescriptor, Any]] = []
        for field in stype.fields:
            value = self._export_value(obj, field, lines, level, sections)
            if value is None:
                continue
            if field.title:
                lines.append("\n; " + field.title)
            lines.append(f"{field.key} = {value}".strip())

        for field, child in sections:
            self._export_section(field, child, lines, level)

    def _export_value(
        self,
        obj: Any,
        field: FieldDescriptor,
        lines: List[str],
        level: int,
        sections: List[Tuple[FieldDescriptor, Any]],
    ) -> Optional[str]:
        """Return the text of a "key = value" line, or None to write no line."""
        if field.getter is not None:
            return self._coercer.stringify(field.getter(obj))
        if not field.public:
            return None

        value = getattr(obj, field.name, _MISSING)
        if value is _MISSING:
            LOG.debug("Skipping unset field %r", field.name)
            return None
        if field.kind is FieldKind.UNTYPED:
            return self._coercer.stringify(value)
        if field.nullable and value is None:
            return self.config.null_token

        if field.kind is FieldKind.NESTED:
            if value is None:
                return None
            if level < MAX_LEVEL:
                sections.append((field, value))
            else:
                LOG.debug(
                    "Dropping [%s]: nesting deeper than %d levels", field.key, MAX_LEVEL
                )
            return None

        if field.kind is FieldKind.ARRAY and self._coercer.writes_keyed(field, value):
            if field.title:
                lines.append("\n; " + field.title)
            for sub, text in self._coercer.keyed_entries(value):
                lines.append(f"{field.key}[{sub}] = {text}".strip())
            return None

        return self._coercer.to_text(field, value)

    def _export_section(
        self, field: FieldDescriptor, child: Any, lines: List[str], level: int
    ) -> None:
        child_type = describe(type(child))
        title = field.title or child_type.title
        if title:
            lines.append("\n; " + title)
        else:
            lines.append("")
        lines.append(f"[{field.key}]")
        self._export_object(child, child_type, lines, level + 1)
