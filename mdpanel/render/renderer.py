"""
Markdown → HTML renderers.

The preprocessor treats the renderer as an opaque collaborator with one
call: render(markdown_text, source_path, live) -> html. MarkdownItRenderer
is the default implementation.
"""

from __future__ import annotations

import html
import os
from pathlib import Path
from typing import Optional, Protocol, Sequence
from urllib.parse import unquote, urlsplit

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin

# Block tokens that receive a line-number id in live mode
_LINE_ANCHORED = {"fence", "code_block", "hr"}


class MarkdownRenderer(Protocol):
    """Renderer collaborator contract."""

    def render(self, markdown_text: str, source_path: Optional[Path], live: bool) -> str:
        ...


def _is_relative_url(url: str) -> bool:
    if not url or url.startswith(("#", "/", "\\")):
        return False
    parts = urlsplit(url)
    # "C:/x.png" parses with scheme "c"; treat drive letters as absolute
    if len(parts.scheme) == 1:
        return False
    return not parts.scheme and not parts.netloc


class MarkdownItRenderer:
    """
    CommonMark renderer on top of markdown-it-py.

    • raw HTML is allowed (include diagnostics are HTML comments)
    • tables and strikethrough are enabled
    • $…$ / $$…$$ are parsed as math tokens and emitted verbatim for MathJax
    • live mode: top-level blocks get id="<source line>" for scroll sync,
      relative image sources are made absolute file URIs
    """

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")
        self._md.use(dollarmath_plugin)

        def math_inline(tokens, idx, options, env):
            return f"${html.escape(tokens[idx].content)}$"

        def math_block(tokens, idx, options, env):
            body = (tokens[idx].content or "").strip("\n")
            return f'<div class="math">$$\n{html.escape(body)}\n$$</div>\n'

        self._md.renderer.rules["math_inline"] = math_inline
        self._md.renderer.rules["math_block"] = math_block
        self._md.renderer.rules["math_block_label"] = math_block

    def render(self, markdown_text: str, source_path: Optional[Path], live: bool) -> str:
        env: dict = {}
        tokens = self._md.parse(markdown_text, env)
        if live:
            self._anchor_lines(tokens)
            if source_path is not None:
                self._absolutize_images(tokens, Path(source_path).parent)
        return self._md.renderer.render(tokens, self._md.options, env)

    @staticmethod
    def _anchor_lines(tokens: Sequence[Token]) -> None:
        for tok in tokens:
            if tok.level != 0 or not tok.map:
                continue
            if tok.nesting == 1 or tok.type in _LINE_ANCHORED:
                tok.attrSet("id", str(tok.map[0]))

    @staticmethod
    def _absolutize_images(tokens: Sequence[Token], base_dir: Path) -> None:
        for tok in tokens:
            for child in tok.children or ():
                if child.type != "image":
                    continue
                src = str(child.attrGet("src") or "")
                if _is_relative_url(src):
                    full = Path(os.path.abspath(base_dir / unquote(src)))
                    child.attrSet("src", full.as_uri())


__all__ = ["MarkdownRenderer", "MarkdownItRenderer"]
