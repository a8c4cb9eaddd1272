"""
Configuration for Markdown tree generation.

Options arrive from three places, lowest precedence first: built-in
defaults, a documentation YAML file named by the ``config`` argument, and
the explicit arguments. Both documentation.js camelCase names and
snake_case names are accepted.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field, fields

import yaml

log = logging.getLogger("mkdocs.plugins.docjs")


class ConfigError(ValueError):
    """Invalid configuration value or file."""


@dataclass
class MarkdownConfig:
    markdown_toc: bool = True
    hljs: dict = field(default_factory=dict)
    no_reference_links: bool = False
    paths: dict = field(default_factory=dict)
    show_returns: bool = False
    show_source_link: bool = False

    @property
    def highlight_auto(self):
        return bool(self.hljs.get("highlightAuto", self.hljs.get("highlight_auto", False)))

    @property
    def highlight_languages(self):
        return list(self.hljs.get("languages") or [])


_ALIASES = {
    "markdownToc": "markdown_toc",
    "noReferenceLinks": "no_reference_links",
    "showReturns": "show_returns",
    "showSourceLink": "show_source_link",
}

_TYPES = {f.name: (dict if f.name in ("hljs", "paths") else bool) for f in fields(MarkdownConfig)}


def _read_config_file(path):
    if not os.path.isfile(path):
        raise ConfigError(f"config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"cannot parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def _normalize(options, origin):
    out = {}
    for key, val in options.items():
        name = _ALIASES.get(key, key)
        if name not in _TYPES:
            log.debug("docjs: ignoring unknown option %r from %s", key, origin)
            continue
        expected = _TYPES[name]
        if val is None and expected is dict:
            val = {}
        if not isinstance(val, expected):
            raise ConfigError(
                f"option {key!r} from {origin} must be {expected.__name__}, "
                f"got {type(val).__name__}"
            )
        out[name] = val
    return out


def load_config(args=None):
    """Merge defaults, the optional config file and ``args`` into a MarkdownConfig."""
    args = dict(args or {})
    merged = {}
    path = args.pop("config", None)
    if path:
        merged.update(_normalize(_read_config_file(path), path))
    merged.update(_normalize(args, "arguments"))
    return MarkdownConfig(**merged)


async def merge_config(args=None):
    return await asyncio.to_thread(load_config, args)
