"""
Build a Markdown document tree from a nested comment forest.

The generator walks comments depth first, emitting each comment's sections
in a fixed order and then its members (global, instance, static, inner)
one heading level deeper. The raw tree then goes through the finishing
passes: cross-reference rewriting, the optional table of contents and
reference-link collection.
"""

from __future__ import annotations

import functools
import logging

from . import sections
from .config import MarkdownConfig, merge_config
from .format_type import format_type
from .highlight import SyntaxClassifier
from .linker import LinkerStack, Slugger
from .model import CommentKind, CommentModelError, Members
from .nodes import u
from .references import collect_reference_links
from .reroute import reroute_links
from .toc import inject_toc

log = logging.getLogger("mkdocs.plugins.docjs")

GENERATOR_COMMENT = (
    "<!-- Generated by mkdocs-docjs. "
    "Update this documentation by updating the source code. -->"
)
TOC_TITLE = "Table of Contents"
FIRST_DEPTH = 2

# Member groups in emission order.
MEMBER_ORDER = ("global", "instance", "static", "inner")


class TreeGenerator:
    def __init__(self, fmt, classify, config=None):
        self.fmt = fmt
        self.classify = classify
        self.config = config or MarkdownConfig()

    def generate(self, depth, comment):
        if not isinstance(comment.members, Members):
            raise CommentModelError(f"comment {comment.name!r} has no members record")

        if comment.kind is CommentKind.NOTE:
            out = [u("heading", [u("text", comment.name or "")], depth=depth)]
            out += sections.description_section(comment)
            out += self._members(depth, comment.members.static)
            return out

        fmt = self.fmt
        out = [u("thematicBreak")]
        out += sections.heading(comment, depth)
        out += sections.augments_section(comment)
        out += sections.see_section(comment)
        out += sections.description_section(comment)
        out += sections.type_section(comment, fmt)
        out += sections.param_section(comment, fmt)
        out += sections.property_section(comment, fmt)
        out += sections.throws_section(comment, fmt)
        if self.config.show_returns:
            out += sections.returns_section(comment, fmt)
        if self.config.show_source_link:
            out += sections.source_section(comment)
        out += sections.examples_section(comment, self.classify)
        out += sections.meta_section(comment)
        for group in MEMBER_ORDER:
            out += self._members(depth, comment.members.group(group))
        return out

    def _members(self, depth, children):
        out = []
        for child in children:
            out += self.generate(depth + 1, child)
        return out


def build_markdown_ast(comments, config=None):
    """Generate the finished document tree for ``comments``."""
    config = config or MarkdownConfig()
    slugger = Slugger()
    linker = LinkerStack(config).namespace_resolver(comments, slugger.anchor)
    fmt = functools.partial(format_type, linker.link)
    classify = SyntaxClassifier(config.highlight_auto, config.highlight_languages)
    generator = TreeGenerator(fmt, classify, config)

    body = []
    for comment in comments:
        body += generator.generate(FIRST_DEPTH, comment)

    children = [u("html", GENERATOR_COMMENT)]
    if config.markdown_toc:
        children.append(u("heading", [u("text", TOC_TITLE)], depth=3))
    children += body
    children.append(u("thematicBreak"))
    root = u("root", children)
    log.debug(
        "docjs: generated %d top-level nodes, %d namespaces", len(children), len(linker.namespaces)
    )

    root = reroute_links(linker.link, root)
    if config.markdown_toc:
        root = inject_toc(root)
    if not config.no_reference_links:
        root = collect_reference_links(root)
    return root


async def markdown_ast(comments, args=None):
    """Merge ``args`` into a configuration, then build the tree."""
    config = await merge_config(args)
    return build_markdown_ast(comments, config)
