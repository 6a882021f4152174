"""
Parsing of include directive targets.

Handles the two spec shapes:
- "notes.md#intro"               simple fragment, id only
- "parts/*.md{#setup .tutorial}" attribute block, id and/or class

and the option bag that follows the quoted spec ("level=2", 'title="x"').
Parsing never fails: anything that does not fit the grammar is taken as a
literal file name without a selector.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..markdown.selectors import SectionSelector

_GLOB_CHARS = ("*", "?")
_FIRST_ID = re.compile(r"#([\w\-]+)")
_FIRST_CLASS = re.compile(r"\.([\w\-]+)")


@dataclass(frozen=True)
class IncludeDirective:
    """One parsed `@include` occurrence."""
    raw_spec: str
    path: str
    section_id: Optional[str] = None
    section_class: Optional[str] = None
    level_offset: int = 0
    is_glob: bool = False
    options: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def selector(self) -> SectionSelector:
        return SectionSelector(want_id=self.section_id, want_class=self.section_class)

    @property
    def has_selector(self) -> bool:
        return bool(self.section_id or self.section_class)


def _is_key_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def parse_options(raw: Optional[str]) -> Dict[str, str]:
    """
    Parses `key=value` / `key="value"` pairs.

    Keys are case-insensitive and stored lower-cased; a later key overrides
    an earlier one. Fragments that are not pairs are skipped.
    """
    out: Dict[str, str] = {}
    if not raw:
        return out
    s = raw
    n = len(s)
    i = 0
    while i < n:
        if not _is_key_char(s[i]):
            i += 1
            continue
        # key
        start = i
        while i < n and _is_key_char(s[i]):
            i += 1
        key = s[start:i]
        j = i
        while j < n and s[j].isspace():
            j += 1
        if j >= n or s[j] != "=":
            continue
        j += 1
        while j < n and s[j].isspace():
            j += 1
        if j >= n:
            break
        # value
        if s[j] == '"':
            close = s.find('"', j + 1)
            if close < 0:
                # unterminated quote: treat the rest as the value
                value, i = s[j + 1:], n
            else:
                value, i = s[j + 1:close], close + 1
        else:
            start = j
            while j < n and not s[j].isspace():
                j += 1
            value, i = s[start:j], j
        out[key.lower()] = value
    return out


def _parse_level(options: Dict[str, str]) -> int:
    raw = options.get("level")
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def _split_attr_block(spec: str) -> Optional[tuple[str, str]]:
    """
    "file{#id .cls}" → ("file", "#id .cls").
    None if the spec is not a well-formed attribute-block form.
    """
    if not spec.endswith("}"):
        return None
    open_idx = spec.find("{")
    if open_idx <= 0:
        return None
    file_part = spec[:open_idx].strip()
    attrs = spec[open_idx + 1:-1]
    if not file_part or "#" in file_part or "{" in attrs or "}" in attrs:
        return None
    return file_part, attrs


def is_glob_path(path: str) -> bool:
    """Glob characters count only in the file-name portion."""
    name = posixpath.basename(path.replace("\\", "/"))
    return any(ch in name for ch in _GLOB_CHARS)


def parse_include_spec(raw_spec: str, raw_options: Optional[str] = "") -> IncludeDirective:
    """
    Builds an IncludeDirective from the quoted spec and the raw option string.
    """
    spec = (raw_spec or "").strip()
    options = parse_options(raw_options)
    level = _parse_level(options)

    path = spec
    section_id: Optional[str] = None
    section_class: Optional[str] = None

    block = _split_attr_block(spec)
    if block is not None:
        path, attrs = block
        # the first id and the first class written in the block are the wanted ones
        m = _FIRST_ID.search(attrs)
        section_id = m.group(1) if m else None
        m = _FIRST_CLASS.search(attrs)
        section_class = m.group(1) if m else None
    elif "#" in spec:
        head, _, frag = spec.partition("#")
        if head.strip() and frag.strip():
            path = head.strip()
            section_id = frag.strip()
        elif head.strip():
            # "file#": no selector
            path = head.strip()

    return IncludeDirective(
        raw_spec=raw_spec,
        path=path,
        section_id=section_id,
        section_class=section_class,
        level_offset=level,
        is_glob=is_glob_path(path),
        options=options,
    )


__all__ = ["IncludeDirective", "parse_include_spec", "parse_options", "is_glob_path"]
