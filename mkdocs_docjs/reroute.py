"""
Rewrite cross-reference markers into links once the whole tree exists.

Two marker forms are handled: link nodes flagged ``jsdoc`` whose url is a
bare name (what extraction produces for ``{@link Name}``), and inline
``{@link ...}`` markers still sitting in text. Anything the resolver does
not know becomes plain text.
"""

from __future__ import annotations

import re

from .nodes import u

_ABSOLUTE_RE = re.compile(r"^(?:https?:|mailto:|ftp:|\.|/|#)", re.IGNORECASE)
_MARKER_RE = re.compile(r"\{@link(?:code|plain)?\s+([^\s|}]+)(?:\s*\|\s*|\s+)?([^}]*)\}")


def _split_text(get_href, value, inside_link):
    pieces = []
    last = 0
    for m in _MARKER_RE.finditer(value):
        if m.start() > last:
            pieces.append(u("text", value[last : m.start()]))
        target = m.group(1)
        label = m.group(2).strip() or target
        href = None if inside_link else get_href(target)
        if href:
            pieces.append(u("link", [u("text", label)], url=href))
        else:
            pieces.append(u("text", label))
        last = m.end()
    if last < len(value):
        pieces.append(u("text", value[last:]))
    return pieces


def reroute_links(get_href, root):
    """Resolve markers in ``root`` in place and return it."""
    stack = [(root, False)]
    while stack:
        parent, inside_link = stack.pop()
        rebuilt = []
        for child in parent.children:
            if child.type == "link" and child.jsdoc and not _ABSOLUTE_RE.match(child.url or ""):
                href = get_href(child.url)
                if not href:
                    # unresolved: keep the label, drop the link
                    rebuilt.extend(child.children or [u("text", child.url or "")])
                    continue
                child.url = href
                child.jsdoc = False
            if child.type == "text" and child.value and "{@link" in child.value:
                rebuilt.extend(_split_text(get_href, child.value, inside_link))
                continue
            rebuilt.append(child)
        parent.children = rebuilt
        for child in rebuilt:
            if child.children:
                stack.append((child, inside_link or child.type in ("link", "linkReference")))
    return root
