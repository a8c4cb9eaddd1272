"""
MkDocs plugin rendering documentation.js comment JSON as API reference pages.

Hooks into the MkDocs build lifecycle: merges the generation options,
loads every configured comment file, registers one generated page per
file in the nav, and renders pages (and ``::: docjs:autodoc`` directives
in hand-written pages) through the Markdown tree generator.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import File

from .config import ConfigError, MarkdownConfig, load_config
from .generator import build_markdown_ast
from .model import CommentModelError, load_comments
from .renderer import render_markdown

log = logging.getLogger("mkdocs.plugins.docjs")

_DIRECTIVE_RE = re.compile(
    r"^(?P<indent>[ \t]*):::[ \t]+docjs:autodoc\s*\n"
    r"(?P<body>(?:(?P=indent)[ \t]+:\w+:.*\n)*)",
    re.MULTILINE,
)
_OPTION_RE = re.compile(r"^\s+:(\w+):\s*(.+)$", re.MULTILINE)

_TRUE = ("true", "yes", "1", "on")

_GENERATION_OPTIONS = (
    "markdown_toc",
    "hljs",
    "no_reference_links",
    "paths",
    "show_returns",
    "show_source_link",
)


@dataclass
class SourceEntry:
    path: str
    title: str
    page_uri: str
    comments: list = field(default_factory=list)


class DocjsConfig(MkDocsConfig):
    sources = config_options.Type(list, default=[])
    output_dir = config_options.Type(str, default="api")
    nav_title = config_options.Type(str, default="API Reference")
    config_file = config_options.Type(str, default="")
    markdown_toc = config_options.Type(bool, default=True)
    hljs = config_options.Type(dict, default={})
    no_reference_links = config_options.Type(bool, default=False)
    paths = config_options.Type(dict, default={})
    show_returns = config_options.Type(bool, default=False)
    show_source_link = config_options.Type(bool, default=False)


def _title_from_path(path):
    base = os.path.splitext(os.path.basename(path))[0]
    return base.replace("_", " ").replace("-", " ").title() or "API"


def _page_uri(path, output_dir):
    base = os.path.splitext(os.path.basename(path))[0] or "index"
    return f"{output_dir}/{base}.md"


class DocjsPlugin(BasePlugin[DocjsConfig]):

    def __init__(self):
        super().__init__()
        self._sources = []
        self._pages = {}
        self._cache = {}
        self._tmpfiles = []
        self._config_dir = ""
        self._md_config = None

    # ── Configuration ──

    def _options(self, **overrides):
        # Only non-default plugin options are passed, so they override the
        # config file without the defaults masking it.
        defaults = MarkdownConfig()
        args = {}
        for name in _GENERATION_OPTIONS:
            val = self.config[name]
            if val != getattr(defaults, name):
                args[name] = val
        cfile = self.config.get("config_file", "")
        if cfile:
            args["config"] = self._abspath(cfile)
        args.update(overrides)
        return args

    def _abspath(self, path):
        if os.path.isabs(path):
            return path
        return os.path.normpath(os.path.join(self._config_dir, path))

    def _load(self, path):
        abspath = self._abspath(path)
        if abspath in self._cache:
            return self._cache[abspath]
        try:
            comments = load_comments(abspath)
        except (OSError, json.JSONDecodeError, CommentModelError) as exc:
            log.error("docjs: cannot load comments from %s: %s", abspath, exc)
            comments = None
        self._cache[abspath] = comments
        return comments

    def _build_sources(self):
        out_dir = self.config["output_dir"]
        sources = []
        seen = set()
        for i, entry in enumerate(self.config.get("sources", [])):
            if isinstance(entry, str):
                entry = {"file": entry}
            if not isinstance(entry, dict) or "file" not in entry:
                log.error("docjs: bad sources[%d], skipping", i)
                continue
            path = entry["file"]
            uri = entry.get("output") or _page_uri(path, out_dir)
            if uri in seen:
                log.error("docjs: sources[%d] maps to %s twice, skipping", i, uri)
                continue
            seen.add(uri)
            sources.append(
                SourceEntry(path=path, title=entry.get("title") or _title_from_path(path), page_uri=uri)
            )
        return sources

    def _inject_nav(self, config):
        if not self._sources:
            return
        section = {self.config["nav_title"]: [{s.title: s.page_uri} for s in self._sources]}
        nav = config.get("nav")
        if nav is None:
            config["nav"] = [section]
            return
        for i, item in enumerate(nav):
            if isinstance(item, dict) and self.config["nav_title"] in item:
                nav[i] = section
                return
        nav.append(section)

    # ── Rendering ──

    def _render(self, comments, md_config, title=None):
        root = build_markdown_ast(comments, md_config)
        body = render_markdown(root)
        if title:
            return f"# {title}\n\n{body}"
        return body

    def _handle_directive(self, match):
        opts = {}
        for m in _OPTION_RE.finditer(match.group("body")):
            opts[m.group(1)] = m.group(2).strip()
        fpath = opts.get("file", "")
        if not fpath:
            return "<!-- docjs: missing :file: for docjs:autodoc -->\n"
        comments = self._load(fpath)
        if comments is None:
            return f"<!-- docjs: cannot load {fpath} -->\n"
        md_config = self._md_config
        if "toc" in opts:
            try:
                md_config = load_config(
                    self._options(markdown_toc=opts["toc"].lower() in _TRUE)
                )
            except ConfigError as exc:
                log.error("docjs: %s", exc)
                return f"<!-- docjs: bad configuration for {fpath} -->\n"
        return self._render(comments, md_config, title=opts.get("title"))

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        self._config_dir = os.path.dirname(config.get("config_file_path", "")) or os.getcwd()
        self._cache.clear()
        self._pages.clear()
        self._tmpfiles.clear()

        try:
            self._md_config = load_config(self._options())
        except ConfigError as exc:
            log.error("docjs: %s, using defaults", exc)
            self._md_config = load_config()

        self._sources = []
        for source in self._build_sources():
            comments = self._load(source.path)
            if comments is None:
                continue
            source.comments = comments
            self._sources.append(source)
            self._pages[source.page_uri] = source
            log.info("docjs: %s: %d top-level comments", source.path, len(comments))

        self._inject_nav(config)
        return config

    def on_files(self, files, *, config, **kwargs):
        for uri in sorted(self._pages):
            try:
                f = File.generated(config, uri, content="")
            except (AttributeError, TypeError):
                f = File(
                    uri,
                    config["docs_dir"],
                    config["site_dir"],
                    config.get("use_directory_urls", True),
                )
                dest = os.path.join(config["docs_dir"], uri)
                os.makedirs(os.path.dirname(dest), exist_ok=True)
                open(dest, "w").close()
                self._tmpfiles.append(dest)
            f.edit_uri = None
            files.append(f)
        return files

    def on_page_markdown(self, markdown, *, page, config, files, **kwargs):
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        source = self._pages.get(src_uri)
        if source is not None:
            return self._render(source.comments, self._md_config, title=source.title)
        return _DIRECTIVE_RE.sub(self._handle_directive, markdown)

    def on_post_build(self, *, config, **kwargs):
        docs_dir = config["docs_dir"]
        for p in self._tmpfiles:
            try:
                os.remove(p)
            except OSError:
                pass
            d = os.path.dirname(p)
            while d != docs_dir:
                try:
                    os.rmdir(d)
                except OSError:
                    break
                d = os.path.dirname(d)
