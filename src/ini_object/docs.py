# src/ini_object/docs.py
"""
Documentation helpers used to derive one-line titles for saved config text.

Provides:
- fetch_title: first content line of a docstring
- type_title: title from a class's own docstring
- attribute_docs: docstrings written directly below class attributes
- attribute_order: class body attribute names in source order
"""

from __future__ import annotations

import ast
import functools
import inspect
import logging
import re
import textwrap
from typing import Dict, List, Optional

LOG = logging.getLogger(__name__)

_VAR_MARKER = re.compile(r"^@var\s+")

# bases that never carry config attributes
_SKIPPED_MODULES = frozenset({"builtins", "abc", "typing"})


def fetch_title(doc: Optional[str]) -> str:
    """
    Return the first non-empty line of a documentation block.

    A leading "@var " marker is stripped.

    Parameters
    ----------
    doc : str or None
        Docstring or description text.

    Returns
    -------
    str
        Title, or an empty string if the block has no content.
    """
    if not doc:
        return ""
    for line in inspect.cleandoc(doc).splitlines():
        line = line.strip()
        if line:
            return _VAR_MARKER.sub("", line).strip()
    return ""


def _own_docstring(cls: type) -> Optional[str]:
    doc = cls.__dict__.get("__doc__")
    if not isinstance(doc, str):
        return None
    # dataclasses put a generated signature into __doc__ when none is written
    if doc == cls.__name__ or doc.startswith(cls.__name__ + "("):
        return None
    return doc


def type_title(cls: type) -> str:
    """Return the title for a class, taken from its own docstring only."""
    return fetch_title(_own_docstring(cls))


@functools.lru_cache(maxsize=None)
def _class_node(cls: type) -> Optional[ast.ClassDef]:
    try:
        source = textwrap.dedent(inspect.getsource(cls))
        tree = ast.parse(source)
    except (OSError, TypeError, SyntaxError) as e:
        LOG.debug("No source for %s, attribute docs unavailable: %s", cls, e)
        return None
    return next((n for n in tree.body if isinstance(n, ast.ClassDef)), None)


def _assigned_names(stmt: ast.stmt) -> List[str]:
    if isinstance(stmt, ast.AnnAssign):
        targets = [stmt.target]
    elif isinstance(stmt, ast.Assign):
        targets = stmt.targets
    else:
        return []
    return [t.id for t in targets if isinstance(t, ast.Name)]


def attribute_order(cls: type) -> List[str]:
    """
    Return the attribute names assigned or annotated in a class body, in
    source order. Empty when source is unavailable.
    """
    node = _class_node(cls)
    if node is None:
        return []
    return [name for stmt in node.body for name in _assigned_names(stmt)]


def _class_attribute_docs(cls: type) -> Dict[str, str]:
    node = _class_node(cls)
    if node is None:
        return {}

    out: Dict[str, str] = {}
    body = node.body
    for stmt, nxt in zip(body, body[1:]):
        names = _assigned_names(stmt)
        if not names:
            continue
        if not (
            isinstance(nxt, ast.Expr)
            and isinstance(nxt.value, ast.Constant)
            and isinstance(nxt.value.value, str)
        ):
            continue
        for name in names:
            out[name] = nxt.value.value
    return out


def attribute_docs(cls: type) -> Dict[str, str]:
    """
    Collect attribute docstrings for a class and its bases.

    An attribute docstring is a string literal placed on the statement
    directly after an attribute assignment in the class body. Subclasses
    override their bases.

    Parameters
    ----------
    cls : type
        Class to inspect.

    Returns
    -------
    Dict[str, str]
        Attribute name -> docstring. Empty when source is unavailable.
    """
    out: Dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        module = klass.__module__
        if module in _SKIPPED_MODULES or module.startswith("pydantic"):
            continue
        out.update(_class_attribute_docs(klass))
    return out
