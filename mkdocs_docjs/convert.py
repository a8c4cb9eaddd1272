#!/usr/bin/env python3
"""
Convert documentation.js comment JSON to a Markdown API reference.

Usage:
    python -m mkdocs_docjs.convert comments.json
    python -m mkdocs_docjs.convert comments.json -o API.md --title "My Lib"
    python -m mkdocs_docjs.convert comments.json --config documentation.yml --no-toc
    python -m mkdocs_docjs.convert comments.json --ast -o tree.json
"""

import argparse
import asyncio
import json
import sys

from .config import ConfigError
from .generator import markdown_ast
from .model import CommentModelError, load_comments
from .renderer import render_markdown


def convert_file(path, args=None, title=None, ast=False):
    comments = load_comments(path)
    root = asyncio.run(markdown_ast(comments, args))
    if ast:
        return json.dumps(root.to_dict(), indent=2) + "\n"
    body = render_markdown(root)
    if title:
        return f"# {title}\n\n{body}"
    return body


def main(argv=None):
    p = argparse.ArgumentParser(description="Render documentation.js comment JSON as Markdown")
    p.add_argument("path", help="Comment JSON file (documentation build --format json)")
    p.add_argument("-o", "--output", help="Write Markdown here instead of stdout")
    p.add_argument("--config", help="Documentation YAML config file")
    p.add_argument("--title", help="Level-one heading placed above the reference")
    p.add_argument("--no-toc", action="store_true", help="Omit the table of contents")
    p.add_argument(
        "--no-reference-links", action="store_true", help="Keep links inline instead of collecting them"
    )
    p.add_argument(
        "--highlight-auto", action="store_true", help="Detect example languages instead of assuming javascript"
    )
    p.add_argument("--ast", action="store_true", help="Write the mdast tree as JSON instead of Markdown")
    args = p.parse_args(argv)

    options = {}
    if args.config:
        options["config"] = args.config
    if args.no_toc:
        options["markdownToc"] = False
    if args.no_reference_links:
        options["noReferenceLinks"] = True
    if args.highlight_auto:
        options["hljs"] = {"highlightAuto": True}

    try:
        md = convert_file(args.path, options, title=args.title, ast=args.ast)
    except (OSError, json.JSONDecodeError, CommentModelError, ConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(md)
        print(f"wrote {args.output}")
    else:
        sys.stdout.write(md)
    return 0


if __name__ == "__main__":
    sys.exit(main())
