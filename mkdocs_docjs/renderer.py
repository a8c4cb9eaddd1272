"""
Markdown renderer for finished document trees.

Takes the root node produced by the generator and turns it into Markdown
text that MkDocs (Python-Markdown) renders: ATX headings, fenced code,
bullet lists with continuation indents, GFM pipe tables and reference
definitions.
"""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r"([\\`*_\[\]])")
_BACKTICKS_RE = re.compile(r"`+")

THEMATIC_BREAK = "* * *"

_ALIGN_DELIMITERS = {"left": ":--", "right": "--:", "center": ":-:"}


def _escape(text):
    return _ESCAPE_RE.sub(r"\\\1", text)


def _code_span(value):
    runs = [len(m) for m in _BACKTICKS_RE.findall(value)]
    fence = "`" * (max(runs) + 1 if runs else 1)
    if value.startswith("`") or value.endswith("`"):
        value = f" {value} "
    return f"{fence}{value}{fence}"


def _link_tail(node):
    if node.title:
        title = node.title.replace('"', '\\"')
        return f'({node.url} "{title}")'
    return f"({node.url})"


def render_inline(nodes):
    parts = []
    for node in nodes or []:
        t = node.type
        if t == "text":
            parts.append(_escape(node.value or ""))
        elif t == "inlineCode":
            parts.append(_code_span(node.value or ""))
        elif t == "strong":
            parts.append(f"**{render_inline(node.children)}**")
        elif t == "emphasis":
            parts.append(f"_{render_inline(node.children)}_")
        elif t == "delete":
            parts.append(f"~~{render_inline(node.children)}~~")
        elif t == "link":
            parts.append(f"[{render_inline(node.children)}]{_link_tail(node)}")
        elif t == "linkReference":
            parts.append(f"[{render_inline(node.children)}][{node.label or node.identifier}]")
        elif t == "image":
            parts.append(f"![{_escape(node.alt or '')}]{_link_tail(node)}")
        elif t == "break":
            parts.append("\\\n")
        elif t == "html":
            parts.append(node.value or "")
        elif node.children is not None:
            # block content inside inline context, e.g. a nested paragraph
            parts.append(render_inline(node.children))
        elif node.value is not None:
            parts.append(_escape(node.value))
    return "".join(parts)


def _indent(text, prefix):
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def _render_list(node):
    items = []
    loose = bool(node.spread)
    start = node.start if node.start is not None else 1
    for i, item in enumerate(node.children or []):
        marker = f"{start + i}." if node.ordered else "-"
        sep = "\n\n" if loose or item.spread else "\n"
        body = sep.join(render_block(child) for child in item.children or [])
        pad = " " * (len(marker) + 1)
        if item.checked is not None:
            body = ("[x] " if item.checked else "[ ] ") + body
        first, _, rest = body.partition("\n")
        text = f"{marker} {first}" if first else marker
        if rest:
            text += "\n" + _indent(rest, pad)
        items.append(text)
    return ("\n\n" if loose else "\n").join(items)


def _table_cell(cell):
    text = render_inline(cell.children).replace("\n", " ")
    return text.replace("|", "\\|")


def _render_table(node):
    rows = [[_table_cell(c) for c in row.children or []] for row in node.children or []]
    if not rows:
        return ""
    width = max(len(r) for r in rows) or 1
    align = list(node.align or [])[:width]
    align += [None] * (width - len(align))
    delimiters = [_ALIGN_DELIMITERS.get(a, "---") for a in align]
    lines = []
    for cells in [rows[0], delimiters] + rows[1:]:
        cells = cells + [""] * (width - len(cells))
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def _render_code(node):
    value = node.value or ""
    fence = "```"
    while fence in value:
        fence += "`"
    return f"{fence}{node.lang or ''}\n{value}\n{fence}"


def render_block(node):
    t = node.type
    if t == "heading":
        return f"{'#' * (node.depth or 1)} {render_inline(node.children)}"
    if t == "paragraph":
        return render_inline(node.children)
    if t == "thematicBreak":
        return THEMATIC_BREAK
    if t == "list":
        return _render_list(node)
    if t == "code":
        return _render_code(node)
    if t == "table":
        return _render_table(node)
    if t == "html":
        return node.value or ""
    if t == "blockquote":
        inner = "\n\n".join(render_block(c) for c in node.children or [])
        return _indent(inner, "> ").replace("\n\n", "\n>\n")
    if t == "definition":
        tail = f' "{node.title}"' if node.title else ""
        return f"[{node.label or node.identifier}]: {node.url}{tail}"
    if t in ("root", "listItem"):
        return "\n\n".join(render_block(c) for c in node.children or [])
    return render_inline([node])


def render_markdown(root):
    """Serialize a document tree to Markdown text."""
    parts = []
    children = root.children or []
    for i, child in enumerate(children):
        # consecutive definitions stay on adjacent lines
        if i and child.type == "definition" and children[i - 1].type == "definition":
            parts[-1] += "\n" + render_block(child)
            continue
        parts.append(render_block(child))
    return "\n\n".join(p for p in parts if p) + "\n"
