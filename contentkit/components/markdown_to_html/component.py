"""
Markdown to HTML component - import of Markdown documents.

The converter performs no sanitization; callers sanitize the result before
inserting it into the editable surface.

Invariants:
- I1: Output is produced for any input; unmatched text passes through
- I2: Rules run once each, in a fixed order
"""

from __future__ import annotations

import logging

from ._impl import markdown_to_html
from .models import ImportMarkdownInput, ImportOutput

logger = logging.getLogger(__name__)


def run_import(inp: ImportMarkdownInput) -> ImportOutput:
    """
    Convert Markdown to HTML.

    Args:
        inp: Input containing the Markdown text.

    Returns:
        ImportOutput with unsanitized HTML.
    """
    html = markdown_to_html(inp.markdown)
    logger.debug(
        "Imported %d chars of Markdown as %d chars of HTML", len(inp.markdown), len(html)
    )
    return ImportOutput(html=html, success=True)


def run(inp: ImportMarkdownInput) -> ImportOutput:
    """Main entry point for the markdown_to_html component."""
    if isinstance(inp, ImportMarkdownInput):
        return run_import(inp)
    raise ValueError(f"Unknown input type: {type(inp)}")
