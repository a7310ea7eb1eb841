"""
Markdown to HTML component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImportMarkdownInput:
    """Input for importing Markdown into the editor."""

    markdown: str


@dataclass(frozen=True)
class ImportOutput:
    """Output for the Markdown import. The html is not sanitized."""

    html: str
    success: bool = True
