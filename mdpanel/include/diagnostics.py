"""
Inline diagnostics emitted in place of an include that could not be resolved.

They are HTML comments, so a renderer passes them through without showing
them, while they stay visible in the expanded Markdown and the page source.
"""

from __future__ import annotations


def _sanitize(value: str) -> str:
    # a literal "-->" would close the comment early
    return value.replace("-->", "--&gt;")


def include_not_found(name: str) -> str:
    return f"<!-- include not found: {_sanitize(name)} -->"


def section_not_found(selector: str, name: str) -> str:
    return f"<!-- section not found: {_sanitize(selector)} in {_sanitize(name)} -->"


def glob_dir_not_found(spec_dir: str) -> str:
    return f"<!-- include glob dir not found: {_sanitize(spec_dir)} -->"


__all__ = ["include_not_found", "section_not_found", "glob_dir_not_found"]
