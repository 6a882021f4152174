"""
Препроцессор include-директив:

    <!-- @include "path/to/file.md" -->
    <!-- @include "file.md#section-id" level=1 -->
    <!-- @include "parts/*.md{#setup .tutorial}" level=-1 -->
"""

from __future__ import annotations

from .expander import DEFAULT_MAX_DEPTH, ExpansionContext, IncludeExpander, expand_includes
from .lexer import DirectiveToken, TextChunk, tokenize
from .resolver import GlobDirectoryNotFound, ResolvedTarget, resolve_targets
from .spec import IncludeDirective, parse_include_spec, parse_options

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DirectiveToken",
    "ExpansionContext",
    "GlobDirectoryNotFound",
    "IncludeDirective",
    "IncludeExpander",
    "ResolvedTarget",
    "TextChunk",
    "expand_includes",
    "parse_include_spec",
    "parse_options",
    "resolve_targets",
    "tokenize",
]
