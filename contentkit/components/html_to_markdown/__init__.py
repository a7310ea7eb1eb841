"""
HTML to Markdown component - tree-walking Markdown serializer.
"""

from ._impl import (
    TAG_RENDERERS,
    html_to_markdown,
    render_children,
    render_node,
    tree_to_markdown,
)
from .component import run, run_export
from .models import ExportMarkdownInput, ExportOutput

__all__ = [
    # Entry points
    "run",
    "run_export",
    # Models
    "ExportMarkdownInput",
    "ExportOutput",
    # Functions
    "TAG_RENDERERS",
    "html_to_markdown",
    "render_children",
    "render_node",
    "tree_to_markdown",
]
