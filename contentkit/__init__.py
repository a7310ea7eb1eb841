"""
contentkit - content transformation engine for the rich text editor.

The three string-boundary entry points used by the editor widget:

- sanitize_html: allow-list cleaning of pasted/dropped or inserted markup
- html_to_markdown: export of editor content
- markdown_to_html: import of Markdown documents (unsanitized)
"""

from contentkit.components.html_to_markdown import html_to_markdown
from contentkit.components.markdown_to_html import markdown_to_html
from contentkit.components.sanitize import SanitizationPolicy, sanitize, sanitize_html

__version__ = "0.1.0"

__all__ = [
    "SanitizationPolicy",
    "html_to_markdown",
    "markdown_to_html",
    "sanitize",
    "sanitize_html",
]
