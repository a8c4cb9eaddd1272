"""
Table of contents injection.

Finds the "Table of Contents" heading and places a tight, nested list of
links to every heading that follows its section directly after it. Slugs
come from the same Python-Markdown helpers MkDocs uses for heading ids.
"""

from __future__ import annotations

import re

from .linker import Slugger
from .nodes import to_string, u

TOC_HEADING_RE = re.compile(r"^(table[ -]of[ -])?contents?$", re.IGNORECASE)


def _collect(root, expression, max_depth):
    slugger = Slugger()
    opening = None
    opening_depth = None
    closing = None
    entries = []
    for index, child in enumerate(root.children):
        if child.type != "heading":
            continue
        value = to_string(child)
        slug = slugger.slug(value)
        if closing is None:
            if opening is not None and child.depth <= opening_depth:
                closing = index
            elif opening is None and expression.match(value.strip()):
                opening = index
                opening_depth = child.depth
                continue
        if closing is not None and value and child.depth <= max_depth:
            entries.append((child.depth, value, slug))
    return opening, entries


def _item(value, slug):
    link = u("link", [u("text", value)], url="#" + slug)
    return u("listItem", [u("paragraph", [link])], spread=False)


def build_toc_list(entries, tight=True):
    base = min(depth for depth, _, _ in entries)
    top = u("list", ordered=False, spread=not tight)
    stack = [top]
    for depth, value, slug in entries:
        level = depth - base
        del stack[level + 1 :]
        while len(stack) <= level:
            parent = stack[-1]
            if not parent.children:
                parent.children.append(u("listItem", spread=False))
            sub = u("list", ordered=False, spread=not tight)
            parent.children[-1].children.append(sub)
            stack.append(sub)
        stack[-1].children.append(_item(value, slug))
    return top


def inject_toc(root, heading=TOC_HEADING_RE, max_depth=6, tight=True):
    """Insert the outline after the contents heading; no-op without one."""
    opening, entries = _collect(root, heading, max_depth)
    if opening is None or not entries:
        return root
    root.children.insert(opening + 1, build_toc_list(entries, tight))
    return root
