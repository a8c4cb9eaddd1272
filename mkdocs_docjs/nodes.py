"""
Document tree nodes.

A small mdast-compatible node type plus the helpers the generator and the
post-processing passes need: a builder, deep copies, an iterative walk and
conversion to and from the plain dict form used in comment JSON.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

PARENT_TYPES = frozenset(
    {
        "root",
        "heading",
        "paragraph",
        "list",
        "listItem",
        "strong",
        "emphasis",
        "delete",
        "link",
        "linkReference",
        "blockquote",
        "table",
        "tableRow",
        "tableCell",
    }
)

# attribute name -> mdast key
_PROPS = {
    "value": "value",
    "depth": "depth",
    "ordered": "ordered",
    "spread": "spread",
    "url": "url",
    "title": "title",
    "lang": "lang",
    "alt": "alt",
    "identifier": "identifier",
    "label": "label",
    "reference_type": "referenceType",
    "start": "start",
    "checked": "checked",
    "align": "align",
    "jsdoc": "jsdoc",
}


@dataclass
class Node:
    type: str
    children: list[Node] | None = None
    value: str | None = None
    depth: int | None = None
    ordered: bool | None = None
    spread: bool | None = None
    url: str | None = None
    title: str | None = None
    lang: str | None = None
    alt: str | None = None
    identifier: str | None = None
    label: str | None = None
    reference_type: str | None = None
    start: int | None = None
    checked: bool | None = None
    align: list[str | None] | None = None
    jsdoc: bool = False
    data: dict = field(default_factory=dict)

    def clone(self):
        return copy.deepcopy(self)

    def to_dict(self):
        out = {"type": self.type}
        for attr, key in _PROPS.items():
            val = getattr(self, attr)
            if val is None or (attr == "jsdoc" and not val):
                continue
            out[key] = val
        if self.children is not None:
            out["children"] = [c.to_dict() for c in self.children]
        return out

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
            raise ValueError(f"not a document node: {raw!r}")
        kwargs = {}
        for attr, key in _PROPS.items():
            if key in raw and raw[key] is not None:
                kwargs[attr] = raw[key]
        node = cls(raw["type"], **kwargs)
        if "children" in raw:
            node.children = [cls.from_dict(c) for c in raw["children"] or []]
        elif node.type in PARENT_TYPES:
            node.children = []
        return node


def u(type_, *args, **props):
    """Build a node the way unist-builder does.

    A string argument becomes ``value``, a list becomes ``children``::

        u("heading", [u("text", "Foo")], depth=2)
        u("inlineCode", "x")
    """
    children = None
    value = None
    for arg in args:
        if isinstance(arg, str):
            value = arg
        elif isinstance(arg, (list, tuple)):
            children = list(arg)
        else:
            raise TypeError(f"unexpected positional argument for {type_}: {arg!r}")
    if children is None and type_ in PARENT_TYPES:
        children = []
    return Node(type_, children=children, value=value, **props)


def clone_all(nodes):
    return [n.clone() for n in nodes or []]


def walk(root):
    """Yield ``(node, parent)`` pairs in document order without recursion."""
    stack = [(root, None)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        if node.children:
            for child in reversed(node.children):
                stack.append((child, node))


def to_string(node):
    """Concatenated text content of a node, like mdast-util-to-string."""
    parts = []
    for child, _ in walk(node):
        if child.value is not None and child.type not in ("html", "code"):
            parts.append(child.value)
        elif child.type == "image" and child.alt:
            parts.append(child.alt)
    return "".join(parts)
