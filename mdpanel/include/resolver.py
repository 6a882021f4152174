"""
Path resolution for include directives.

A literal path yields exactly one target (existing or not), a glob yields
every matching regular file of one directory level, in a deterministic
case-insensitive order.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .spec import IncludeDirective

logger = logging.getLogger(__name__)


class GlobDirectoryNotFound(Exception):
    """The directory part of a glob spec does not exist."""

    def __init__(self, spec_dir: str, search_dir: Path):
        super().__init__(f"glob directory not found: {search_dir}")
        self.spec_dir = spec_dir
        self.search_dir = search_dir


@dataclass(frozen=True)
class ResolvedTarget:
    """One file addressed by a directive."""
    absolute_path: Path
    source_directive_path: str

    @property
    def name(self) -> str:
        return self.absolute_path.name


def _normalize(path: Path) -> Path:
    # abspath instead of resolve(): symlinks are kept as written
    return Path(os.path.abspath(path))


def _split_spec_path(spec_path: str) -> tuple[str, str]:
    """'parts/sub/*.md' → ('parts/sub', '*.md'); the separator may be '/' or '\\'."""
    norm = spec_path.replace("\\", "/")
    head, _, tail = norm.rpartition("/")
    return head, tail


def ordinal_ignore_case_key(name: str) -> tuple[str, str]:
    """Sort key: case-insensitive first, exact name as tie-breaker."""
    return name.casefold(), name


def glob_directory(directory: Path, pattern: str) -> List[Path]:
    """
    Regular files of `directory` (no recursion) whose names match `pattern`.
    Matching is case-insensitive, the result is sorted by ordinal_ignore_case_key.
    """
    want = pattern.casefold()
    found: List[Path] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if fnmatch.fnmatchcase(entry.name.casefold(), want):
                found.append(Path(entry.path))
    found.sort(key=lambda p: ordinal_ignore_case_key(p.name))
    return found


def resolve_targets(directive: IncludeDirective, base_dir: Path) -> List[ResolvedTarget]:
    """
    Resolves directive.path against base_dir.

    Raises GlobDirectoryNotFound for a glob whose directory is missing;
    the caller turns it into a diagnostic.
    """
    if not directive.is_glob:
        full = _normalize(base_dir / directive.path)
        return [ResolvedTarget(absolute_path=full, source_directive_path=directive.path)]

    spec_dir, pattern = _split_spec_path(directive.path)
    search_dir = _normalize(base_dir / spec_dir) if spec_dir else _normalize(base_dir)
    if not search_dir.is_dir():
        raise GlobDirectoryNotFound(spec_dir, search_dir)

    files = glob_directory(search_dir, pattern)
    logger.debug("glob %r in %s matched %d file(s)", pattern, search_dir, len(files))
    return [ResolvedTarget(absolute_path=p, source_directive_path=directive.path) for p in files]


__all__ = [
    "GlobDirectoryNotFound",
    "ResolvedTarget",
    "glob_directory",
    "ordinal_ignore_case_key",
    "resolve_targets",
]
