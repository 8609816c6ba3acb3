#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import fields
from typing import Any, List

from mk_ast import Node, Program


def format_node(node: Any, indent: int = 0) -> List[str]:
    """
    Generic, reflection-based AST tree dump.

    - Shows the node class name.
    - Prints simple scalar fields inline (excluding `token`).
    - Recursively prints child Node / tuple-of-Node fields on new indented lines.
    - Appends the originating token literal as `<'let'>` when it is not empty.

    This is a structural view for debugging; the canonical form is `str(node)`.
    """
    ind = "  " * indent

    # Sequences: print each element at same indentation
    if isinstance(node, (list, tuple)):
        lines: List[str] = []
        for elem in node:
            lines.extend(format_node(elem, indent))
        return lines

    if not isinstance(node, Node):
        return [ind + repr(node)]

    simple_parts = []
    child_fields = []
    for f in fields(node):
        if f.name == "token":
            continue
        value = getattr(node, f.name)
        if isinstance(value, (Node, tuple)):
            child_fields.append((f.name, value))
        elif value is not None:
            simple_parts.append((f.name, value))

    # Header: ClassName(field1=..., field2=...) <'literal'>
    header = node.__class__.__name__
    if simple_parts:
        inner = ", ".join(f"{name}={value!r}" for name, value in simple_parts)
        header = f"{header}({inner})"
    if node.token_literal():
        header += f" <{node.token_literal()!r}>"

    lines = [ind + header]

    for name, value in child_fields:
        if isinstance(value, tuple) and not value:
            continue
        lines.append(ind + "  " + f"{name}:")
        lines.extend(format_node(value, indent + 2))

    return lines


def format_program(program: Program) -> str:
    """
    Convenience: dump a whole Program as a string.
    """
    return "\n".join(format_node(program, indent=0))
