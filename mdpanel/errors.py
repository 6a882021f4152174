"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from MdPanelUserError.

Programming errors and bugs should NOT inherit from MdPanelUserError:
they will propagate with full tracebacks.

Include resolution problems are not errors at all: they end up as
inline diagnostic comments in the expanded document.
"""

from __future__ import annotations


class MdPanelUserError(Exception):
    """
    Base class for all user-facing errors in Markdown Panel.

    These errors indicate problems that the user can fix:
    configuration issues, unreadable input files, failed exports, etc.
    """
    pass


class ConfigError(MdPanelUserError):
    """Invalid settings file or setting value."""
    pass


class ExportError(MdPanelUserError):
    """The export artifact could not be written."""
    pass


class DisplayError(MdPanelUserError):
    """A display surface could not show the page (e.g. preview file not writable)."""
    pass


__all__ = ["MdPanelUserError", "ConfigError", "ExportError", "DisplayError"]
