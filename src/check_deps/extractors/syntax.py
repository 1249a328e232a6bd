# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Helpers for reading values and errors out of tree-sitter syntax trees."""

import re
from typing import Any, Optional

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

# Backslash followed by a line terminator continues the literal on the next line
_LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}


def _replace_escape(match: "re.Match[str]") -> str:
    escape = match.group(1)
    if escape.startswith("u{"):
        code_point = int(escape[2:-1], 16)
        return chr(code_point) if code_point <= 0x10FFFF else match.group(0)
    if len(escape) > 1 and escape[0] in "ux":
        return chr(int(escape[1:], 16))
    if escape in _LINE_CONTINUATIONS:
        return ""
    return _SIMPLE_ESCAPES.get(escape, escape)


def unescape(raw: str) -> str:
    """Apply JavaScript string escape sequences to raw literal text."""
    if "\\" not in raw:
        return raw
    return _ESCAPE_RE.sub(_replace_escape, raw)


def node_text(node: Any) -> str:
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""


def string_value(node: Any) -> str:
    """Return the value of a 'string' node (quotes stripped, escapes applied)."""
    return unescape(node_text(node)[1:-1])


def template_value(node: Any) -> Optional[str]:
    """Return the static text of a template literal.

    Returns:
        The text between the backticks, or None when the template
        interpolates expressions.
    """
    if any(child.type == "template_substitution" for child in node.named_children):
        return None
    return unescape(node_text(node)[1:-1])


def find_error_node(root: Any) -> Optional[Any]:
    """Return the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def describe_syntax_error(root: Any) -> str:
    """Describe the first syntax error of a tree whose root has_error."""
    node = find_error_node(root)
    if node is None:
        return "Syntax error"

    row, column = node.start_point
    location = f"line {row + 1}, column {column + 1}"
    if node.is_missing:
        return f"Syntax error: missing '{node.type}' at {location}"

    snippet = node_text(node).strip().splitlines()
    if snippet:
        token = snippet[0][:40]
        return f"Syntax error: unexpected '{token}' at {location}"
    return f"Syntax error at {location}"
