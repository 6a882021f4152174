"""mdpanel: Markdown preview with recursive @include composition."""

from mdpanel.config import Settings, load_settings
from mdpanel.errors import ConfigError, DisplayError, ExportError, MdPanelUserError
from mdpanel.include import IncludeExpander, expand_includes, parse_include_spec
from mdpanel.markdown import extract_section, slugify_github
from mdpanel.render import RenderPipeline, RenderResult, RenderSupervisor, export_html

__all__ = [
    "ConfigError",
    "DisplayError",
    "ExportError",
    "IncludeExpander",
    "MdPanelUserError",
    "RenderPipeline",
    "RenderResult",
    "RenderSupervisor",
    "Settings",
    "expand_includes",
    "export_html",
    "extract_section",
    "load_settings",
    "parse_include_spec",
    "slugify_github",
]
