"""
Markdown to HTML component - ordered pattern-substitution converter.
"""

from ._impl import (
    assemble_paragraphs,
    convert_blockquotes,
    convert_emphasis,
    convert_headings,
    convert_horizontal_rules,
    convert_images_and_links,
    convert_lists,
    convert_tables,
    markdown_to_html,
)
from .component import run, run_import
from .models import ImportMarkdownInput, ImportOutput

__all__ = [
    # Entry points
    "run",
    "run_import",
    # Models
    "ImportMarkdownInput",
    "ImportOutput",
    # Rules
    "assemble_paragraphs",
    "convert_blockquotes",
    "convert_emphasis",
    "convert_headings",
    "convert_horizontal_rules",
    "convert_images_and_links",
    "convert_lists",
    "convert_tables",
    "markdown_to_html",
]
