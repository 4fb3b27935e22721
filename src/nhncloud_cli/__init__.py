"""
NHN Cloud CLI output rendering.

This package renders command results of any shape as aligned tables, JSON or
YAML, with optional JMESPath projection of the result.
"""

from .cli import main
from .output import OutputFormat, render_output
from .utils import debug_print

__version__ = "1.0.0"
__all__ = ["main", "render_output", "OutputFormat", "debug_print"]
