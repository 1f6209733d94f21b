# src/ini_object/coercion.py
"""
Conversion between document cells and typed field values.

Loading never fails for bool fields: anything that is not a configured true
token is False. Scalar conversions that fail (e.g. "abc" into an int field)
raise CoercionError rather than falling back to a default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from .config import GatewayConfig
from .exceptions import CoercionError
from .introspect import FieldDescriptor, FieldKind


class ValueCoercer:
    """
    Convert document values to and from declared field kinds.

    Parameters
    ----------
    config : GatewayConfig
        Tokens for null, array splitting and true booleans.
    """

    def __init__(self, config: GatewayConfig) -> None:
        self.config = config

    # --------------------------------------------------------------------------
    # load direction
    # --------------------------------------------------------------------------

    def is_null(self, field: FieldDescriptor, raw: Any) -> bool:
        """Return True if raw is the null token and the field admits None."""
        if not field.nullable or not isinstance(raw, str):
            return False
        return raw == self.config.null_token

    def to_python(self, field: FieldDescriptor, raw: Any) -> Any:
        """
        Convert a raw document value for a non-nested field.

        Parameters
        ----------
        field : FieldDescriptor
            Target field; its kind selects the conversion.
        raw : Any
            String, list or keyed mapping as found in the document.

        Returns
        -------
        Any
            Value ready to assign to the field.

        Raises
        ------
        CoercionError
            If a scalar field receives an array value or text that does not
            convert to the declared number type.
        """
        if field.kind is FieldKind.UNTYPED:
            return raw
        if field.kind is FieldKind.ARRAY:
            return self._import_array(field, raw)
        if field.kind is FieldKind.BOOL:
            return self.to_bool(raw)
        if field.kind is FieldKind.NESTED:
            raise CoercionError(
                f"field {field.name!r}: nested values are mapped by the gateway"
            )
        return self._import_scalar(field.kind, raw, field.name)

    def to_bool(self, raw: Any) -> bool:
        """True iff raw exactly matches one of the configured true tokens."""
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, (int, float)):
            raw = self.stringify(raw)
        return isinstance(raw, str) and raw in self.config.true_tokens

    def split(self, raw: str) -> List[str]:
        """Split plain text into trimmed array elements; "" gives []."""
        if raw == "":
            return []
        return [p.strip() for p in raw.split(self.config.array_separator)]

    def _import_array(self, field: FieldDescriptor, raw: Any) -> Any:
        if isinstance(raw, Mapping):
            values: Any = dict(raw)
        elif isinstance(raw, (list, tuple)):
            values = list(raw)
        else:
            values = self.split(raw if isinstance(raw, str) else self.stringify(raw))

        if field.container is dict and isinstance(values, list):
            values = {str(i): v for i, v in enumerate(values)}

        if field.item_kind is None or field.item_kind is FieldKind.UNTYPED:
            return values
        if isinstance(values, dict):
            return {k: self._import_item(field, v) for k, v in values.items()}
        return [self._import_item(field, v) for v in values]

    def _import_item(self, field: FieldDescriptor, raw: Any) -> Any:
        if field.item_kind is FieldKind.BOOL:
            return self.to_bool(raw)
        return self._import_scalar(field.item_kind, raw, field.name)

    def _import_scalar(self, kind: Optional[FieldKind], raw: Any, name: str) -> Any:
        if isinstance(raw, (Mapping, list, tuple)):
            raise CoercionError(
                f"field {name!r}: expected a single {kind.value} value, "
                f"got {type(raw).__name__}"
            )
        if kind is FieldKind.STRING:
            return raw if isinstance(raw, str) else self.stringify(raw)
        try:
            if kind is FieldKind.INT:
                return int(raw)
            if kind is FieldKind.FLOAT:
                return float(raw)
        except (TypeError, ValueError) as e:
            raise CoercionError(
                f"field {name!r}: cannot convert {raw!r} to {kind.value}"
            ) from e
        return raw

    # --------------------------------------------------------------------------
    # save direction
    # --------------------------------------------------------------------------

    @staticmethod
    def stringify(value: Any) -> str:
        """Text form of a value: canonical bool tokens, "" for None."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return ""
        return str(value)

    def to_text(self, field: FieldDescriptor, value: Any) -> str:
        """Text form of a non-nested, non-keyed field value."""
        if field.kind is FieldKind.BOOL:
            return "true" if value else "false"
        if field.kind is FieldKind.ARRAY:
            return self.join(value)
        return self.stringify(value)

    def join(self, values: Any) -> str:
        """Join array elements with the separator plus one space."""
        if isinstance(values, Mapping):
            values = values.values()
        elif isinstance(values, str):
            return values
        return (self.config.array_separator + " ").join(
            self.stringify(v) for v in values
        )

    def writes_keyed(self, field: FieldDescriptor, value: Any) -> bool:
        """
        Return True if an ARRAY value is saved as "key[sub] = value" lines.

        Non-empty values of mapping-declared fields always are, so that they
        reload as mappings. Other values only when they carry a non-numeric key.
        """
        if field.container is dict and isinstance(value, Mapping) and value:
            return True
        return self.is_keyed(value)

    @staticmethod
    def is_keyed(value: Any) -> bool:
        """Return True for a mapping with at least one non-numeric key."""
        if not isinstance(value, Mapping):
            return False
        for key in value:
            if isinstance(key, bool) or not isinstance(key, (int, str)):
                return True
            if isinstance(key, str) and not key.isdigit():
                return True
        return False

    def keyed_entries(self, value: Mapping) -> List[Tuple[str, str]]:
        """(subkey, text) pairs of a keyed array, in insertion order."""
        return [(str(k), self.stringify(v)) for k, v in value.items()]

