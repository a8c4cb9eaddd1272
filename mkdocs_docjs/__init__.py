"""
mkdocs-docjs — JavaScript API Documentation for MkDocs.

Turns documentation.js comment JSON into a structured Markdown document
tree, with cross-referenced types, a table of contents and reference
links, and renders it as API reference pages in MkDocs.
"""

__version__ = "1.0.0"
