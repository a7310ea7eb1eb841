"""
Content transformation API routes.

Exposes the sanitizer and the two Markdown converters to the editor widget.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from contentkit.adapters.markup import SoupMarkupAdapter
from contentkit.adapters.rules import RulesAdapter
from contentkit.api.deps import get_markup, get_rules_port
from contentkit.api.schemas import (
    ExportMarkdownRequest,
    ExportMarkdownResponse,
    ImportMarkdownRequest,
    ImportMarkdownResponse,
    SanitizationNoticeModel,
    SanitizeRequest,
    SanitizeResponse,
)
from contentkit.components.html_to_markdown import ExportMarkdownInput, run_export
from contentkit.components.markdown_to_html import ImportMarkdownInput, run_import
from contentkit.components.sanitize import SanitizeHtmlInput, run_sanitize

router = APIRouter()


@router.post("/sanitize", response_model=SanitizeResponse)
def sanitize_markup(
    request: SanitizeRequest,
    rules: RulesAdapter = Depends(get_rules_port),
    markup: SoupMarkupAdapter = Depends(get_markup),
) -> SanitizeResponse:
    """Sanitize pasted or inserted markup against the allow-list."""
    result = run_sanitize(
        SanitizeHtmlInput(html=request.html, allowed_tags=tuple(request.allowed_tags)),
        rules=rules,
        markup=markup,
    )
    return SanitizeResponse(
        html=result.html,
        notices=[
            SanitizationNoticeModel(code=n.code, message=n.message, path=n.path)
            for n in result.notices
        ],
    )


@router.post("/export/markdown", response_model=ExportMarkdownResponse)
def export_markdown(
    request: ExportMarkdownRequest,
    markup: SoupMarkupAdapter = Depends(get_markup),
) -> ExportMarkdownResponse:
    """Export editor markup as Markdown."""
    result = run_export(ExportMarkdownInput(html=request.html), markup=markup)
    return ExportMarkdownResponse(markdown=result.markdown)


@router.post("/import/markdown", response_model=ImportMarkdownResponse)
def import_markdown(
    request: ImportMarkdownRequest,
    rules: RulesAdapter = Depends(get_rules_port),
    markup: SoupMarkupAdapter = Depends(get_markup),
) -> ImportMarkdownResponse:
    """
    Convert Markdown to markup.

    With sanitize set, the result goes through the sanitizer the same way the
    editor does before inserting imported content.
    """
    html = run_import(ImportMarkdownInput(markdown=request.markdown)).html
    if request.sanitize:
        html = run_sanitize(SanitizeHtmlInput(html=html), rules=rules, markup=markup).html
    return ImportMarkdownResponse(html=html)
