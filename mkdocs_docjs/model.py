"""
Comment model consumed by the Markdown generator.

Mirrors the JSON that documentation.js emits with ``--format json``:
comments with typed tags, doctrine type expressions, mdast descriptions
and members partitioned into static, instance, global and inner groups.
Loading is strict about structure and lenient about optional data.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum

from .nodes import Node


class CommentModelError(ValueError):
    """The comment forest does not have the required shape."""


class CommentKind(Enum):
    CLASS = "class"
    CONSTANT = "constant"
    EVENT = "event"
    EXTERNAL = "external"
    FILE = "file"
    FUNCTION = "function"
    INTERFACE = "interface"
    MEMBER = "member"
    MIXIN = "mixin"
    MODULE = "module"
    NAMESPACE = "namespace"
    NOTE = "note"
    TYPEDEF = "typedef"


# Kinds whose comments render a synthesized function signature when they
# have no explicit @type.
CALLABLE_KINDS = frozenset({CommentKind.FUNCTION, CommentKind.CLASS})

MEMBER_GROUPS = ("static", "instance", "global", "inner")

# documentation.js namespace separators per member group
_SCOPE_SEPARATORS = {"static": ".", "instance": "#", "inner": "~", "global": ""}


@dataclass
class TypeExpr:
    type: str
    name: str | None = None
    key: str | None = None
    value: object = None
    expression: TypeExpr | None = None
    elements: list[TypeExpr] = field(default_factory=list)
    applications: list[TypeExpr] = field(default_factory=list)
    fields: list[TypeExpr] = field(default_factory=list)
    params: list[TypeExpr] = field(default_factory=list)
    result: TypeExpr | None = None

    @classmethod
    def from_dict(cls, raw):
        if raw is None:
            return None
        if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
            raise CommentModelError(f"malformed type expression: {raw!r}")

        def many(key):
            return [cls.from_dict(item) for item in raw.get(key) or []]

        value = raw.get("value")
        if isinstance(value, dict):
            value = cls.from_dict(value)
        return cls(
            type=raw["type"],
            name=raw.get("name"),
            key=raw.get("key"),
            value=value,
            expression=cls.from_dict(raw.get("expression")),
            elements=many("elements"),
            applications=many("applications"),
            fields=many("fields"),
            params=many("params"),
            result=cls.from_dict(raw.get("result")),
        )


@dataclass
class CommentTag:
    name: str = ""
    title: str = ""
    type: TypeExpr | None = None
    description: list[Node] | None = None
    default: str | None = None
    properties: list[CommentTag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict):
            raise CommentModelError(f"malformed tag: {raw!r}")
        default = raw.get("default")
        return cls(
            name=raw.get("name") or "",
            title=raw.get("title") or "",
            type=TypeExpr.from_dict(raw.get("type")),
            description=_rich(raw.get("description")),
            default=None if default is None else str(default),
            properties=_tags(raw.get("properties"), "properties"),
        )


@dataclass
class CommentExample:
    description: str
    caption: list[Node] | None = None

    @classmethod
    def from_dict(cls, raw):
        if isinstance(raw, str):
            return cls(description=raw)
        if not isinstance(raw, dict):
            raise CommentModelError(f"malformed example: {raw!r}")
        caption = raw.get("caption")
        if isinstance(caption, str):
            caption = [Node("text", value=caption)] if caption else None
        else:
            caption = _rich(caption)
        return cls(description=raw.get("description") or "", caption=caption)


@dataclass
class Context:
    file: str = ""
    line: int = 0
    github_url: str = ""
    github_path: str = ""

    @property
    def has_github(self):
        return bool(self.github_url)

    @classmethod
    def from_dict(cls, raw):
        if not raw:
            return None
        loc = raw.get("loc") or {}
        start = loc.get("start") or {}
        github = raw.get("github") or {}
        return cls(
            file=raw.get("file") or "",
            line=int(start.get("line") or 0),
            github_url=github.get("url") or "",
            github_path=github.get("path") or "",
        )


@dataclass
class Members:
    static: list[Comment] = field(default_factory=list)
    instance: list[Comment] = field(default_factory=list)
    global_: list[Comment] = field(default_factory=list)
    inner: list[Comment] = field(default_factory=list)

    def group(self, name):
        return getattr(self, "global_" if name == "global" else name)

    @classmethod
    def from_dict(cls, raw, owner=""):
        if not isinstance(raw, dict):
            raise CommentModelError(f"comment {owner!r} has no members record")
        groups = {}
        for name in MEMBER_GROUPS:
            if name not in raw:
                raise CommentModelError(f"comment {owner!r} is missing members.{name}")
            items = raw[name]
            if not isinstance(items, list):
                raise CommentModelError(f"comment {owner!r}: members.{name} is not a list")
            groups["global_" if name == "global" else name] = [Comment.from_dict(c) for c in items]
        return cls(**groups)


@dataclass
class Comment:
    name: str = ""
    kind: CommentKind | str | None = None
    description: list[Node] | None = None
    type: TypeExpr | None = None
    params: list[CommentTag] = field(default_factory=list)
    properties: list[CommentTag] = field(default_factory=list)
    returns: list[CommentTag] = field(default_factory=list)
    throws: list[CommentTag] = field(default_factory=list)
    sees: list[list[Node]] = field(default_factory=list)
    examples: list[CommentExample] = field(default_factory=list)
    augments: list[CommentTag] = field(default_factory=list)
    context: Context | None = None
    members: Members = field(default_factory=Members)
    namespace: str = ""
    version: str | None = None
    since: str | None = None
    copyright: list[Node] | None = None
    author: str | None = None
    license: str | None = None
    deprecated: list[Node] | None = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict):
            raise CommentModelError(f"malformed comment: {raw!r}")
        name = raw.get("name") or ""
        kind = raw.get("kind") or None
        if kind is not None:
            try:
                kind = CommentKind(kind)
            except ValueError:
                # open set: documentation.js adds kinds such as "enum"
                kind = str(kind)
        return cls(
            name=name,
            kind=kind,
            description=_rich(raw.get("description")),
            type=TypeExpr.from_dict(raw.get("type")),
            params=_tags(raw.get("params"), "params"),
            properties=_tags(raw.get("properties"), "properties"),
            returns=_tags(raw.get("returns"), "returns"),
            throws=_tags(raw.get("throws"), "throws"),
            sees=[_rich(s) or [] for s in _seq(raw.get("sees"), "sees")],
            examples=[CommentExample.from_dict(e) for e in _seq(raw.get("examples"), "examples")],
            augments=_tags(raw.get("augments"), "augments"),
            context=Context.from_dict(raw.get("context")),
            members=Members.from_dict(raw.get("members"), owner=name),
            namespace=raw.get("namespace") or "",
            version=_plain(raw.get("version")),
            since=_plain(raw.get("since")),
            copyright=_rich(raw.get("copyright")),
            author=_plain(raw.get("author")),
            license=_plain(raw.get("license")),
            deprecated=_rich(raw.get("deprecated")),
        )


def _seq(raw, what):
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CommentModelError(f"{what} must be a list, got {type(raw).__name__}")
    return raw


def _tags(raw, what):
    return [CommentTag.from_dict(t) for t in _seq(raw, what)]


def _plain(raw):
    if raw is None or raw == "":
        return None
    return str(raw)


def _rich(raw):
    """mdast root (or bare string) -> list of child nodes, None when empty."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        return [Node("paragraph", children=[Node("text", value=raw)])]
    try:
        node = Node.from_dict(raw)
    except ValueError as exc:
        raise CommentModelError(str(exc)) from None
    children = node.children if node.type == "root" else [node]
    return children or None


def load_comments(source):
    """Load a comment forest from a JSON string, a file path or parsed data."""
    if not isinstance(source, (str, os.PathLike)):
        data = source
    elif isinstance(source, str) and source.lstrip().startswith("["):
        data = json.loads(source)
    else:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    if not isinstance(data, list):
        raise CommentModelError("comment JSON must be a list of comments")
    return [Comment.from_dict(c) for c in data]


def qualified_name(comment, parent_namespace="", scope="global"):
    if comment.namespace:
        return comment.namespace
    if not comment.name:
        return ""
    if not parent_namespace:
        return comment.name
    return parent_namespace + _SCOPE_SEPARATORS.get(scope, ".") + comment.name


def walk_comments(comments):
    """Yield ``(comment, qualified_name)`` depth-first.

    Member groups are visited global, instance, static, inner, the same
    order the generator emits them in. A note only contributes its static
    members, since those are the only ones it renders.
    """
    stack = [(c, "", "global") for c in reversed(comments)]
    while stack:
        comment, parent_ns, scope = stack.pop()
        ns = qualified_name(comment, parent_ns, scope)
        yield comment, ns
        pending = []
        if comment.kind is CommentKind.NOTE:
            groups = ("static",)
        else:
            groups = ("global", "instance", "static", "inner")
        for group in groups:
            for child in comment.members.group(group):
                pending.append((child, ns, group))
        stack.extend(reversed(pending))
