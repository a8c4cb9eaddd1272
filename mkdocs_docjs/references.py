"""
Turn inline links into reference-style links with shared definitions.

Links with the same url and title share one numbered definition. The
definitions go just before the closing thematic break so the document
still ends with it.
"""

from __future__ import annotations

from .nodes import u, walk


def collect_reference_links(root):
    ids = {}
    definitions = []
    for node, _ in walk(root):
        if node.type != "link":
            continue
        key = (node.url or "", node.title or "")
        identifier = ids.get(key)
        if identifier is None:
            identifier = str(len(ids) + 1)
            ids[key] = identifier
            definitions.append(
                u("definition", identifier=identifier, label=identifier, url=key[0], title=node.title)
            )
        node.type = "linkReference"
        node.identifier = identifier
        node.label = identifier
        node.reference_type = "full"
        node.url = None
        node.title = None
    if not definitions:
        return root
    children = root.children
    at = len(children)
    if children and children[-1].type == "thematicBreak":
        at -= 1
    children[at:at] = definitions
    return root
