"""
HTML to Markdown component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportMarkdownInput:
    """Input for exporting editor markup as Markdown."""

    html: str


@dataclass(frozen=True)
class ExportOutput:
    """Output for the Markdown export."""

    markdown: str
    success: bool = True
