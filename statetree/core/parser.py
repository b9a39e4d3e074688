# statetree/core/parser.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Declaration mini-language.

    "parent -> child1 child2 ... childN"    children of ``parent``
    "child1 child2"                         children of the root
    "parent -> !child1 child2"              ``child1`` is the default substate

The structured form is a list of :class:`Declaration` triples; the strings
are sugar over StateGraph.add_state().
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping

from statetree.core.errors import DeclarationError
from statetree.interfaces.types import Declaration

ARROW = "->"
DEFAULT_MARKER = "!"

_WHITESPACE = re.compile(r"\s+")


def split_names(text: str) -> List[str]:
    """Split a space-separated list of names, dropping empty tokens."""
    return [name for name in _WHITESPACE.split(text.strip()) if name]


def parse_declaration(text: str, root: str) -> List[Declaration]:
    """
    Parse one declaration string into (parent, child, is_default) triples.

    :param text: The declaration string.
    :param root: Name used as parent when the string has no arrow.
    :raises DeclarationError: If the string holds more than one arrow.
    """
    parts = text.split(ARROW)
    if len(parts) == 1:
        parent, children = root, parts[0]
    elif len(parts) == 2:
        parent, children = parts[0].strip(), parts[1]
    else:
        raise DeclarationError(f"String {text} is an invalid state pair and has been dropped.")

    declarations = []
    for token in split_names(children):
        is_default = token.startswith(DEFAULT_MARKER)
        child = token[len(DEFAULT_MARKER) :] if is_default else token
        if child:
            declarations.append(Declaration(parent, child, is_default))
    return declarations


def normalize(spec: Any) -> List[str]:
    """
    Flatten any accepted declaration form into a list of declaration strings,
    preserving order.

    Accepted forms: a string, a list/tuple of accepted forms, or a mapping of
    parent name to child names (a space-separated string or a list of names).

    :raises DeclarationError: For any other type.
    """
    if isinstance(spec, str):
        return [spec]
    if isinstance(spec, Mapping):
        lines = []
        for parent, children in spec.items():
            if not isinstance(children, str):
                children = " ".join(children)
            lines.append(f"{parent} {ARROW} {children}")
        return lines
    if isinstance(spec, (list, tuple)):
        lines = []
        for item in spec:
            lines.extend(normalize(item))
        return lines
    raise DeclarationError(f"Cannot declare states from {type(spec).__name__}: {spec!r}")
