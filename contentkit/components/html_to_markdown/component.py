"""
HTML to Markdown component - export of editor content.

Invariants:
- I1: Output is produced for any input, including empty or malformed markup
- I2: Tags without a Markdown form contribute their children's text
"""

from __future__ import annotations

import logging

from contentkit.ports.markup import MarkupPort

from ._impl import html_to_markdown
from .models import ExportMarkdownInput, ExportOutput

logger = logging.getLogger(__name__)


def run_export(
    inp: ExportMarkdownInput,
    *,
    markup: MarkupPort | None = None,
) -> ExportOutput:
    """
    Export markup as Markdown.

    Args:
        inp: Input containing the markup to export.
        markup: Optional markup port; defaults to the BeautifulSoup adapter.

    Returns:
        ExportOutput with the Markdown text.
    """
    markdown = html_to_markdown(inp.html, markup_port=markup)
    logger.debug(
        "Exported %d chars of markup to %d chars of Markdown", len(inp.html), len(markdown)
    )
    return ExportOutput(markdown=markdown, success=True)


def run(
    inp: ExportMarkdownInput,
    *,
    markup: MarkupPort | None = None,
) -> ExportOutput:
    """Main entry point for the html_to_markdown component."""
    if isinstance(inp, ExportMarkdownInput):
        return run_export(inp, markup=markup)
    raise ValueError(f"Unknown input type: {type(inp)}")
