"""
Language detection for example code blocks.

Wraps Pygments lexer guessing. The classifier is built from the ``hljs``
settings of a MarkdownConfig and handed to the examples section
explicitly, so there is no process-wide highlighter state.
"""

from __future__ import annotations

import logging

from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

log = logging.getLogger("mkdocs.plugins.docjs")

DEFAULT_LANGUAGE = "javascript"


class SyntaxClassifier:
    """Callable ``code -> language tag``.

    With ``auto`` off every block is tagged DEFAULT_LANGUAGE.
    ``languages`` narrows auto-detection to the listed lexer names.
    """

    def __init__(self, auto=False, languages=()):
        self.auto = bool(auto)
        self.lexers = []
        for name in languages or ():
            try:
                self.lexers.append(get_lexer_by_name(name))
            except ClassNotFound:
                log.warning("docjs: unknown highlight language %r, ignored", name)

    def __call__(self, code):
        if not self.auto or not code.strip():
            return DEFAULT_LANGUAGE
        if self.lexers:
            return self._best_of(code)
        try:
            lexer = guess_lexer(code)
        except ClassNotFound:
            return DEFAULT_LANGUAGE
        if isinstance(lexer, TextLexer) or not lexer.aliases:
            return DEFAULT_LANGUAGE
        return lexer.aliases[0]

    def _best_of(self, code):
        best, score = None, 0.0
        for lexer in self.lexers:
            rv = lexer.analyse_text(code)
            if rv > score:
                best, score = lexer, rv
        if best is None:
            return self.lexers[0].aliases[0]
        return best.aliases[0]
