"""
Recursive expansion of `@include` directives.

Pipeline for every directive found by the lexer:
  1) parse the spec and options (spec.py)
  2) resolve one or many target files (resolver.py)
  3) per file: read → expand nested directives at depth + 1 →
     extract the requested section → shift heading levels
  4) splice the joined contributions in place of the directive

Nothing here raises on bad input: unresolved includes become inline
diagnostic comments, and exceeding the depth limit leaves the text as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import diagnostics
from .lexer import DirectiveToken, iter_segments
from .resolver import GlobDirectoryNotFound, ResolvedTarget, resolve_targets
from .spec import IncludeDirective, parse_include_spec
from ..markdown.normalize import shift_heading_levels
from ..markdown.selectors import extract_section

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16


@dataclass(frozen=True)
class ExpansionContext:
    """Where the text being expanded came from and how deep we are."""
    current_file: Optional[Path]
    depth: int = 0

    @property
    def base_dir(self) -> Path:
        if self.current_file is None:
            return Path.cwd()
        return self.current_file.parent

    def descend(self, file: Path) -> ExpansionContext:
        return ExpansionContext(current_file=file, depth=self.depth + 1)


class IncludeExpander:
    """
    Expands include directives in Markdown text.

    Instances hold configuration only; all per-call state travels in
    ExpansionContext, so one expander may serve concurrent renders.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, encoding: str = "utf-8"):
        self.max_depth = max_depth
        self.encoding = encoding

    def expand(self, text: str, current_file: Optional[Path | str] = None, depth: int = 0) -> str:
        path = Path(current_file) if current_file else None
        if path is not None and not path.is_absolute():
            path = Path.cwd() / path
        return self._expand(text, ExpansionContext(current_file=path, depth=depth))

    # ---------- internals ----------

    def _expand(self, text: str, ctx: ExpansionContext) -> str:
        if ctx.depth > self.max_depth:
            logger.debug("include depth %d exceeds %d, leaving text as is", ctx.depth, self.max_depth)
            return text

        parts: List[str] = []
        for seg in iter_segments(text):
            if isinstance(seg, DirectiveToken):
                parts.append(self._expand_directive(seg, ctx))
            else:
                parts.append(seg.text)
        return "".join(parts)

    def _expand_directive(self, token: DirectiveToken, ctx: ExpansionContext) -> str:
        directive = parse_include_spec(token.spec, token.options)
        logger.debug("line %d: include %r (depth %d)", token.line, directive.raw_spec, ctx.depth)

        try:
            targets = resolve_targets(directive, ctx.base_dir)
        except GlobDirectoryNotFound as e:
            logger.warning("include glob dir not found: %s", e.search_dir)
            return diagnostics.glob_dir_not_found(e.spec_dir)

        outputs = [self._process_one(t, directive, ctx) for t in targets]
        return "\n".join(o for o in outputs if o)

    def _read(self, target: ResolvedTarget) -> Optional[str]:
        try:
            return target.absolute_path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            logger.warning("cannot decode %s: %s", target.absolute_path, e)
        except OSError as e:
            logger.warning("cannot read %s: %s", target.absolute_path, e)
        return None

    def _process_one(self, target: ResolvedTarget, directive: IncludeDirective, ctx: ExpansionContext) -> str:
        if not target.absolute_path.is_file():
            logger.warning("include not found: %s", target.absolute_path)
            return diagnostics.include_not_found(target.name)

        content = self._read(target)
        if content is None:
            return diagnostics.include_not_found(target.name)
        content = content.lstrip("\ufeff")

        # вложенные директивы: относительно включаемого файла
        content = self._expand(content, ctx.descend(target.absolute_path))

        if directive.has_selector:
            extracted = extract_section(content, directive.section_id, directive.section_class)
            if extracted is None:
                label = directive.selector.label()
                logger.warning("section not found: %s in %s", label, target.absolute_path)
                return diagnostics.section_not_found(label, target.name)
            content = extracted

        if directive.level_offset:
            content = shift_heading_levels(content, directive.level_offset)

        return content


def expand_includes(
    text: str,
    current_file: Optional[Path | str] = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Shortcut for IncludeExpander(max_depth).expand(text, current_file)."""
    return IncludeExpander(max_depth=max_depth).expand(text, current_file)


__all__ = ["DEFAULT_MAX_DEPTH", "ExpansionContext", "IncludeExpander", "expand_includes"]
