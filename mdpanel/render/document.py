"""
HTML document assembly.

Wraps a rendered body into the fixed page skeleton and produces the two
variants of one render pass:
  • display: with <base href>, Mermaid and MathJax head injections;
  • export : plain portable HTML without scripts.
"""

from __future__ import annotations

import html
import os
import re
from pathlib import Path
from typing import Optional

# The canvas is always light: diagrams and user CSS assume a white page.
_HTML_BASE = """<!DOCTYPE html>
<html>
  <head>
    <meta http-equiv="X-UA-Compatible" content="IE=edge">
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <meta name="color-scheme" content="light">
    <title>{title}</title>
    <style type="text/css">
      :root {{ color-scheme: light; }}
      html, body {{ background:#fff !important; color:#111 !important; }}
      .mermaid {{ background:#fff !important; color:#111 !important; }}
    </style>
    <style type="text/css" id="mdpanel-user-style">
{style}
    </style>
  </head>
  <body class="markdown-body" style="{body_style}">
  {body}
  </body>
</html>
"""

# Mermaid: turns ```mermaid fences into diagrams. Safe to call repeatedly.
MERMAID_SCRIPT = """<script type="module">
  import mermaid from 'https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.esm.min.mjs';
  window.__renderMermaid = async () => {
    const nodes = document.querySelectorAll('pre code.language-mermaid, pre code.mermaid');
    nodes.forEach(code => {
      const graph = code.textContent;
      const pre = code.closest('pre') || code;
      const div = document.createElement('div');
      div.className = 'mermaid';
      div.textContent = graph;
      pre.replaceWith(div);
    });
    mermaid.initialize({ startOnLoad: false, theme: 'default' });
    await mermaid.run({ querySelector: '.mermaid:not([data-processed])' });
  };
  if (document.readyState === 'loading') {
    document.addEventListener('DOMContentLoaded', () => { window.__renderMermaid().catch(() => {}); });
  } else {
    window.__renderMermaid().catch(() => {});
  }
</script>"""

# MathJax: typesets $…$, \\(…\\), $$…$$, \\[…\\]. window.retypesetMath() re-runs it.
MATHJAX_SCRIPT = r"""<script>
  window.MathJax = {
    tex: {
      inlineMath: [['$', '$'], ['\\(', '\\)']],
      displayMath: [['$$', '$$'], ['\\[', '\\]']],
      processEscapes: true,
      processEnvironments: true,
      tags: 'ams'
    },
    options: {
      skipHtmlTags: ['script','noscript','style','textarea','pre','code']
    },
    startup: { typeset: false }
  };
</script>
<script src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml.js" defer></script>
<script>
  (function waitMJ(){
    if (window.MathJax && MathJax.startup && MathJax.typesetPromise) {
      MathJax.startup.promise.then(function(){ MathJax.typesetPromise(); });
    } else {
      setTimeout(waitMJ, 50);
    }
  })();

  window.retypesetMath = function(){
    if (window.MathJax && MathJax.typesetPromise) {
      if (MathJax.typesetClear) { MathJax.typesetClear(); }
      return MathJax.typesetPromise();
    }
    return Promise.resolve();
  };
</script>"""

# Run by a display surface after an incremental body/style patch.
RETYPESET_SCRIPT = """(async function(){
  try { if (window.__renderMermaid) { await window.__renderMermaid(); } } catch(e) {}
  try {
    if (window.retypesetMath) { await window.retypesetMath(); }
    else if (window.MathJax && MathJax.typesetPromise) { await MathJax.typesetPromise(); }
  } catch(e) {}
})();"""

USER_STYLE_ID = "mdpanel-user-style"

MSG_NO_SUPPORTED_FILE_EXT = (
    "<h3>The current file <u>{name}</u> has no valid Markdown file extension.</h3>"
    "<div>Valid file extensions: {extensions}</div>"
)


def assemble_document(body_html: str, *, title: str, style_css: str, body_style: str = "") -> str:
    """Full HTML page around an already rendered body."""
    return _HTML_BASE.format(
        title=html.escape(title),
        style=style_css,
        body_style=html.escape(body_style, quote=True),
        body=body_html,
    )


def make_base_href(source_path: Optional[Path | str]) -> str:
    """
    <base href="file:///…/"> for the directory of an existing source file.
    Empty string when there is nothing sensible to point at.
    """
    if not source_path:
        return ""
    path = Path(source_path)
    if not path.is_file():
        return ""
    directory = Path(os.path.abspath(path.parent))
    if not directory.is_dir():
        return ""
    # as_uri() percent-escapes; the trailing slash keeps the last segment a directory
    uri = directory.as_uri()
    if not uri.endswith("/"):
        uri += "/"
    return f'<base href="{html.escape(uri, quote=True)}">'


def head_injections(source_path: Optional[Path | str]) -> str:
    """base href + MathJax + Mermaid, in that order."""
    return make_base_href(source_path) + MATHJAX_SCRIPT + MERMAID_SCRIPT


def _find_ci(haystack: str, needle: str) -> int:
    m = re.search(re.escape(needle), haystack, re.IGNORECASE)
    return m.start() if m else -1


def inject_into_head(document: str, fragment: str) -> str:
    """Inserts fragment right before </head>; without a head, prepends one."""
    i = _find_ci(document, "</head>")
    if i >= 0:
        return document[:i] + fragment + document[i:]
    return "<head>" + fragment + "</head>" + document


def build_display_document(body_html: str, *, title: str, style_css: str, source_path: Optional[Path | str]) -> str:
    page = assemble_document(body_html, title=title, style_css=style_css)
    return inject_into_head(page, head_injections(source_path))


def build_export_document(body_html: str, *, title: str, style_css: str) -> str:
    return assemble_document(body_html, title=title, style_css=style_css)


def unsupported_extension_body(name: str, extensions: str) -> str:
    return MSG_NO_SUPPORTED_FILE_EXT.format(name=html.escape(name), extensions=html.escape(extensions))


__all__ = [
    "MATHJAX_SCRIPT",
    "MERMAID_SCRIPT",
    "RETYPESET_SCRIPT",
    "USER_STYLE_ID",
    "assemble_document",
    "build_display_document",
    "build_export_document",
    "head_injections",
    "inject_into_head",
    "make_base_href",
    "unsupported_extension_body",
]
