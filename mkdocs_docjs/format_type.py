"""
Render doctrine type expressions as inline document nodes.

Expansion uses an explicit work stack instead of recursion so deeply
nested structural types cannot exhaust the interpreter stack. Each stack
item is either a finished Node (emitted as-is) or a TypeExpr still to be
expanded into pieces.
"""

from __future__ import annotations

import json

from .model import TypeExpr
from .nodes import Node, u

_LITERALS = {
    "AllLiteral": "any",
    "NullLiteral": "null",
    "UndefinedLiteral": "undefined",
    "VoidLiteral": "void",
}

_PREFIXES = {"NullableType": "?", "NonNullableType": "!", "RestType": "..."}


def _joined(items, sep, start=None, end=None):
    pieces = [u("text", start)] if start else []
    for i, item in enumerate(items):
        if i:
            pieces.append(u("text", sep))
        pieces.append(item)
    if end:
        pieces.append(u("text", end))
    return pieces


def _literal_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)


def _expand(get_href, node):
    """One level of expansion: a list of Nodes and TypeExprs."""
    kind = node.type
    if kind == "NameExpression" and node.name:
        href = get_href(node.name) if get_href else None
        if href:
            return [u("link", [u("text", node.name)], url=href)]
        return [u("inlineCode", node.name)]
    if kind in _LITERALS:
        return [u("inlineCode", _LITERALS[kind])]
    if kind in ("StringLiteralType", "NumericLiteralType", "BooleanLiteralType"):
        return [u("inlineCode", _literal_value(node.value))]
    if kind == "UnionType":
        return _joined(node.elements, " | ", "(", ")")
    if kind == "TypeApplication" and node.expression is not None:
        return [node.expression] + _joined(node.applications, ", ", "<", ">")
    if kind == "ArrayType":
        return _joined(node.elements, ", ", "[", "]")
    if kind == "RecordType":
        return _joined(node.fields, ", ", "{", "}")
    if kind == "FieldType":
        if node.value is None:
            return [u("text", node.key or "")]
        if not isinstance(node.value, TypeExpr):
            return [u("text", f"{node.key}: "), u("inlineCode", _literal_value(node.value))]
        return [u("text", f"{node.key}: "), node.value]
    if kind == "FunctionType":
        pieces = _joined(node.params, ", ", "(", ")")
        pieces.append(u("text", " => "))
        pieces.append(node.result if node.result is not None else u("inlineCode", "void"))
        return pieces
    if kind == "ParameterType":
        if node.expression is None:
            return [u("text", node.name or "")]
        return [u("text", f"{node.name}: "), node.expression]
    if kind == "OptionalType" and node.expression is not None:
        return [node.expression, u("text", "?")]
    if kind in _PREFIXES:
        if node.expression is None:
            return [u("text", _PREFIXES[kind])]
        return [u("text", _PREFIXES[kind]), node.expression]
    return [u("inlineCode", node.name or kind)]


def format_type(get_href, node):
    """Inline nodes for ``node``; ``get_href(name)`` resolves named types."""
    if node is None:
        return [u("inlineCode", "any")]
    out = []
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, Node):
            out.append(item)
        else:
            stack.extend(reversed(_expand(get_href, item)))
    return out


def synthesize_function_type(comment):
    """Function type for a callable comment without an explicit type.

    Only the first ``returns`` entry contributes the result.
    """
    params = [TypeExpr("ParameterType", name=p.name, expression=p.type) for p in comment.params]
    result = comment.returns[0].type if comment.returns else None
    return TypeExpr("FunctionType", params=params, result=result)
