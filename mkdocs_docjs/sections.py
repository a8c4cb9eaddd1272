"""
Section builders.

Each builder takes one comment and returns a list of document nodes. An
empty list means the section is omitted entirely; builders never return
empty wrapper nodes. Builders that render types take the type formatter
(``fmt(type_expr) -> [Node]``) as an argument.
"""

from __future__ import annotations

from .format_type import synthesize_function_type
from .model import CALLABLE_KINDS
from .nodes import clone_all, u

META_TAGS = ("version", "since", "copyright", "author", "license", "deprecated")
_RICH_META = ("copyright", "deprecated")


def _inline(nodes):
    """Children of a lone paragraph, so rich text can sit inside one."""
    nodes = clone_all(nodes)
    if len(nodes) == 1 and nodes[0].type == "paragraph":
        return nodes[0].children
    return nodes


def _description(tag):
    return _inline(tag.description) if tag.description else []


def heading(comment, depth):
    title = [u("text", comment.name or "")]
    ctx = comment.context
    if ctx and ctx.has_github:
        title = [u("link", title, url=ctx.github_url)]
    return [u("heading", title, depth=depth)]


def augments_section(comment):
    if not comment.augments:
        return []
    names = ", ".join(tag.name for tag in comment.augments)
    return [u("paragraph", [u("strong", [u("text", "Extends: "), u("text", names)])])]


def see_section(comment):
    if not comment.sees:
        return []
    items = [
        u("listItem", [u("paragraph", [u("strong", [u("text", "See: ")] + _inline(see))])])
        for see in comment.sees
    ]
    return [u("list", items, ordered=False, spread=False)]


def description_section(comment):
    return clone_all(comment.description)


def type_section(comment, fmt):
    if comment.type is not None:
        expr = comment.type
    elif comment.kind in CALLABLE_KINDS:
        expr = synthesize_function_type(comment)
    else:
        return []
    return [u("paragraph", [u("text", "Type: ")] + fmt(expr))]


def _tag_list(tags, fmt, with_default):
    items = []
    for tag in tags:
        line = [u("inlineCode", tag.name), u("text", " ")]
        # params skip a missing type, properties always show one (``any``)
        if tag.type is not None or not with_default:
            line += [u("strong", fmt(tag.type)), u("text", " ")]
        line += _description(tag)
        if with_default and tag.default is not None:
            line += [
                u("text", " (optional, default "),
                u("inlineCode", tag.default),
                u("text", ")"),
            ]
        children = [u("paragraph", line)]
        if tag.properties:
            children.append(_tag_list(tag.properties, fmt, with_default))
        items.append(u("listItem", children))
    return u("list", items, ordered=False, spread=False)


def param_section(comment, fmt):
    if not comment.params:
        return []
    return [_tag_list(comment.params, fmt, with_default=True)]


def property_section(comment, fmt):
    if not comment.properties:
        return []
    return [_tag_list(comment.properties, fmt, with_default=False)]


def _typed_line(label, tag, fmt):
    line = [u("text", label), u("text", " ")]
    if tag.type is not None:
        line += [u("strong", fmt(tag.type)), u("text", " ")]
    return line + _description(tag)


def returns_section(comment, fmt):
    return [u("paragraph", _typed_line("Returns:", tag, fmt)) for tag in comment.returns]


def throws_section(comment, fmt):
    if not comment.throws:
        return []
    items = [
        u("listItem", [u("paragraph", _typed_line("Throws:", tag, fmt))]) for tag in comment.throws
    ]
    return [u("list", items, ordered=False, spread=False)]


def source_section(comment):
    ctx = comment.context
    if not ctx or not ctx.has_github:
        return []
    label = f"{ctx.github_path}:{ctx.line}"
    link = u("link", [u("text", label)], url=ctx.github_url, title="Source code on GitHub")
    return [u("paragraph", [u("text", "Source: "), link])]


def examples_section(comment, classify):
    if not comment.examples:
        return []
    out = [u("paragraph", [u("text", "Examples:")])]
    for example in comment.examples:
        if example.caption:
            out.append(u("paragraph", [u("emphasis", _inline(example.caption))]))
        out.append(u("code", example.description, lang=classify(example.description)))
    return out


def meta_section(comment):
    present = [tag for tag in META_TAGS if getattr(comment, tag)]
    if not present:
        return []
    items = []
    for tag in present:
        value = getattr(comment, tag)
        content = _inline(value) if tag in _RICH_META else [u("text", value)]
        line = [u("strong", [u("text", tag)]), u("text", ": ")] + content
        items.append(u("listItem", [u("paragraph", line)]))
    return [
        u("paragraph", [u("strong", [u("text", "Meta")])]),
        u("list", items, ordered=False, spread=False),
    ]
