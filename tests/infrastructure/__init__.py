"""
Common test infrastructure for Markdown Panel.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess
- rendering_utils: Renderer stubs and pipeline helpers
"""

from .file_utils import write, write_markdown, write_text_file
from .cli_utils import run_cli
from .rendering_utils import EchoRenderer, make_result, strip_line_ids

__all__ = [
    "write", "write_markdown", "write_text_file",
    "run_cli",
    "EchoRenderer", "make_result", "strip_line_ids",
]
