"""
Cross-reference resolution.

A LinkerStack is an ordered list of resolvers consulted in turn: the
namespaces found in the comment forest first, then explicit ``paths`` from
the configuration for names the forest does not define. Anchors are slugged with Python-Markdown's toc helpers so
they agree with the heading ids MkDocs generates.
"""

from __future__ import annotations

from markdown.extensions.toc import slugify, unique

from .model import CommentKind, walk_comments


class Slugger:
    """Hands out unique slugs, suffixing ``_1``, ``_2``... on collisions."""

    def __init__(self, separator="-"):
        self.separator = separator
        self._seen = set()

    def slug(self, value):
        return unique(slugify(value, self.separator), self._seen)

    def anchor(self, namespace):
        return "#" + self.slug(namespace)


class LinkerStack:
    def __init__(self, config=None):
        self.stack = []
        self.namespaces = {}
        paths = getattr(config, "paths", None) or {}
        if paths:
            self.stack.append(lambda name: paths.get(name))

    def namespace_resolver(self, comments, resolver):
        """Register an anchor for every namespace in ``comments``.

        ``resolver`` is called once per distinct qualified name; note
        comments are document structure and get no namespace.
        """
        namespaces = {}
        for comment, ns in walk_comments(comments):
            if not ns or comment.kind is CommentKind.NOTE or ns in namespaces:
                continue
            namespaces[ns] = resolver(ns)
        self.namespaces = namespaces
        self.stack.insert(0, namespaces.get)
        return self

    def link(self, name):
        """Anchor or URL for ``name``, or None when nothing knows it."""
        if not name:
            return None
        for resolve in self.stack:
            found = resolve(name)
            if found:
                return found
        return None
