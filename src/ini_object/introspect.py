# src/ini_object/introspect.py
"""
Field descriptor tables for config classes.

A config class is any of:
- a dataclass,
- a pydantic BaseModel subclass,
- a plain class declaring annotated and/or unannotated class attributes.

describe(cls) builds the class's StructuralType once and caches it per class.
Each FieldDescriptor records the document key, the value kind, nullability,
visibility, optional set_<name>/get_<name> accessors and a title for saved
comments.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import inspect
import logging
import sys
import types
import typing
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from .docs import attribute_docs, attribute_order, fetch_title, type_title
from .naming import camel_to_snake

LOG = logging.getLogger(__name__)

__all__ = ["FieldKind", "FieldDescriptor", "StructuralType", "describe"]


class FieldKind(str, Enum):
    """Value kind of a declared field."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ARRAY = "array"
    NESTED = "nested"
    UNTYPED = "untyped"


SCALAR_KINDS: Dict[type, FieldKind] = {
    str: FieldKind.STRING,
    int: FieldKind.INT,
    float: FieldKind.FLOAT,
    bool: FieldKind.BOOL,
}

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

_MISSING = object()

# bookkeeping attributes that abc and typing add to user classes
_CLASS_INTERNALS = frozenset({"_abc_impl", "_is_protocol", "_is_runtime_protocol"})

# classes from these modules (Path, Enum, datetime, ...) are never sections
_STDLIB_MODULES = frozenset(sys.stdlib_module_names) | {"builtins"}


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """
    Metadata for one declared field.

    Attributes
    ----------
    name : str
        Attribute name as declared on the class.
    key : str
        Document key (word-underscored, leading underscores dropped).
    kind : FieldKind
        Declared value kind.
    nullable : bool
        True if the declaration admits None.
    public : bool
        False for names starting with an underscore.
    nested : type or None
        Target class when kind is NESTED.
    item_kind : FieldKind or None
        Scalar element kind of an ARRAY field, when declared.
    container : type or None
        list or dict for an ARRAY field, following the declared container.
    setter : callable or None
        Unbound set_<name>(self, raw) method; receives raw document values.
    getter : callable or None
        Unbound get_<name>(self) method; its result is saved as text.
    title : str
        One-line comment written above the saved value.
    """

    name: str
    key: str
    kind: FieldKind
    nullable: bool = False
    public: bool = True
    nested: Optional[type] = None
    item_kind: Optional[FieldKind] = None
    container: Optional[type] = None
    setter: Optional[Callable[[Any, Any], Any]] = None
    getter: Optional[Callable[[Any], Any]] = None
    title: str = ""


@dataclasses.dataclass(frozen=True)
class StructuralType:
    """Ordered field descriptors of a config class."""

    cls: type
    name: str
    fields: Tuple[FieldDescriptor, ...]
    title: str = ""
    instantiable: bool = True

    def field(self, name: str) -> FieldDescriptor:
        """Return the descriptor for a declared attribute name."""
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is Union or origin is types.UnionType


def _is_stdlib(cls: type) -> bool:
    return cls.__module__.partition(".")[0] in _STDLIB_MODULES


def _is_structural(cls: type) -> bool:
    """Return True if cls should be mapped as a nested section."""
    if dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel):
        return True
    if _is_stdlib(cls):
        return False
    if issubclass(cls, Enum):
        return False
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return True
    return any(
        inspect.get_annotations(klass) or _class_body_order(klass)
        for klass in cls.__mro__
        if not _is_stdlib(klass)
    )


def _container(origin: Any) -> type:
    return dict if origin in _MAPPING_ORIGINS else list


def _item_kind(args: Tuple[Any, ...]) -> Optional[FieldKind]:
    if not args or not isinstance(args[-1], type):
        return None
    return SCALAR_KINDS.get(args[-1])


def resolve_kind(
    annotation: Any,
) -> Tuple[FieldKind, bool, Optional[type], Optional[FieldKind], Optional[type]]:
    """
    Map a type annotation to (kind, nullable, nested class, item kind,
    container).

    Parameters
    ----------
    annotation : Any
        Resolved annotation, or the module sentinel for "not annotated".

    Returns
    -------
    tuple
        FieldKind, nullable flag, nested class (NESTED only), scalar element
        kind and container type (list or dict, ARRAY only).
    """
    if annotation is _MISSING or annotation is Any:
        return FieldKind.UNTYPED, False, None, None, None

    if _is_union(annotation):
        args = typing.get_args(annotation)
        rest = [a for a in args if a is not type(None)]
        nullable = len(rest) < len(args)
        if len(rest) != 1:
            return FieldKind.UNTYPED, nullable, None, None, None
        kind, _, nested, item, container = resolve_kind(rest[0])
        return kind, nullable, nested, item, container

    if annotation is type(None):
        return FieldKind.UNTYPED, True, None, None, None

    origin = typing.get_origin(annotation)
    if origin is not None:
        if origin in _SEQUENCE_ORIGINS or origin in _MAPPING_ORIGINS:
            item = _item_kind(typing.get_args(annotation))
            return FieldKind.ARRAY, False, None, item, _container(origin)
        return FieldKind.UNTYPED, False, None, None, None

    if not isinstance(annotation, type):
        return FieldKind.UNTYPED, False, None, None, None

    # bool is checked before int since it is a subclass of it
    for scalar in (bool, str, int, float):
        if annotation is scalar:
            return SCALAR_KINDS[scalar], False, None, None, None
    if annotation in _SEQUENCE_ORIGINS or annotation in _MAPPING_ORIGINS:
        return FieldKind.ARRAY, False, None, None, _container(annotation)
    if _is_structural(annotation):
        return FieldKind.NESTED, False, annotation, None, None
    return FieldKind.UNTYPED, False, None, None, None


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        LOG.warning(
            "Could not resolve annotations of %s (%s); unresolved fields are untyped",
            cls.__qualname__,
            e,
        )
        out: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            out.update(inspect.get_annotations(klass))
        return out


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or typing.get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(
        ("ClassVar", "typing.ClassVar")
    )


def _is_data_attribute(name: str, value: Any) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    if name in _CLASS_INTERNALS:
        return False
    if callable(value):
        return False
    return not isinstance(value, (property, classmethod, staticmethod))


def _class_body_order(klass: type) -> List[str]:
    """Annotated and assigned attribute names of one class, in body order."""
    annotations = inspect.get_annotations(klass)
    names = [
        name
        for name, value in vars(klass).items()
        if name in annotations or _is_data_attribute(name, value)
    ]
    # annotation-only names have no entry in vars(); place them before the
    # next annotated name that has one
    declared = list(annotations)
    for i, name in enumerate(declared):
        if name in names:
            continue
        following = [n for n in declared[i + 1 :] if n in names]
        names.insert(names.index(following[0]) if following else len(names), name)

    source = attribute_order(klass)
    if source:
        rank: Dict[str, int] = {}
        for i, name in enumerate(source):
            rank.setdefault(name, i)
        names.sort(key=lambda name: rank.get(name, len(rank)))
    return names


def _declared_fields(cls: type) -> List[Tuple[str, Any, str]]:
    """Return (name, annotation, explicit title) in declaration order."""
    if issubclass(cls, BaseModel):
        return [
            (name, info.annotation, info.description or info.title or "")
            for name, info in cls.model_fields.items()
        ]

    hints = _type_hints(cls)

    if dataclasses.is_dataclass(cls):
        return [
            (f.name, hints.get(f.name, _MISSING), str(f.metadata.get("title", "")))
            for f in dataclasses.fields(cls)
        ]

    seen: Dict[str, Tuple[str, Any, str]] = {}
    for klass in reversed(cls.__mro__):
        if klass.__module__ in ("builtins", "abc", "typing"):
            continue
        for name in _class_body_order(klass):
            if name in seen or _is_class_var(hints.get(name)):
                continue
            seen[name] = (name, hints.get(name, _MISSING), "")
    return list(seen.values())


def _accessor(cls: type, prefix: str, public_name: str) -> Optional[Callable]:
    method = getattr(cls, f"{prefix}_{public_name}", None)
    return method if callable(method) else None


def _instantiable(cls: type) -> bool:
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return False
    try:
        inspect.signature(cls).bind()
    except TypeError:
        return False
    except ValueError:
        # no introspectable signature; assume a no-argument constructor
        return True
    return True


# ------------------------------------------------------------------------------
# public API
# ------------------------------------------------------------------------------


def describe(cls: type) -> StructuralType:
    """
    Build the field descriptor table for a config class.

    Parameters
    ----------
    cls : type
        Dataclass, pydantic model or plain class.

    Returns
    -------
    StructuralType
        Fields in declaration order. Results are cached per class.

    Raises
    ------
    TypeError
        If cls is not a class.
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a class, got {type(cls).__name__}")
    return _describe(cls)


@functools.lru_cache(maxsize=None)
def _describe(cls: type) -> StructuralType:
    docs = attribute_docs(cls)
    fields: List[FieldDescriptor] = []
    for name, annotation, title in _declared_fields(cls):
        kind, nullable, nested, item_kind, container = resolve_kind(annotation)
        public_name = name.lstrip("_")
        fields.append(
            FieldDescriptor(
                name=name,
                key=camel_to_snake(public_name),
                kind=kind,
                nullable=nullable,
                public=not name.startswith("_"),
                nested=nested,
                item_kind=item_kind,
                container=container,
                setter=_accessor(cls, "set", public_name),
                getter=_accessor(cls, "get", public_name),
                title=title or fetch_title(docs.get(name)),
            )
        )

    stype = StructuralType(
        cls=cls,
        name=cls.__qualname__,
        fields=tuple(fields),
        title=type_title(cls),
        instantiable=_instantiable(cls),
    )
    LOG.debug("Described %s: %d fields", stype.name, len(stype.fields))
    return stype
