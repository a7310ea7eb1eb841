"""
Sanitize component - allow-list cleaning of externally sourced markup.

Called on every paste/drop and before committing programmatically inserted
fragments.

Invariants:
- I1: Every output tag is allow-listed
- I2: No attribute outside the per-tag allow-list survives
- I3: No script-executing URL survives in href/src
- I4: Every retained link carries rel="noopener noreferrer"
- I5: Sanitizing twice equals sanitizing once
"""

from __future__ import annotations

from contentkit.ports.markup import MarkupPort

from ._impl import (
    DEFAULT_ALLOWED_ATTRIBUTES,
    DEFAULT_ALLOWED_CSS_PROPERTIES,
    SanitizationPolicy,
    sanitize_html,
)
from .models import SanitizationNotice, SanitizeHtmlInput, SanitizeOutput
from .ports import RulesPort


def _build_policy(
    allowed_tags: tuple[str, ...],
    rules: RulesPort | None,
) -> SanitizationPolicy:
    """Build the policy from the caller's tags, falling back to rules, then defaults."""
    if rules is None:
        return SanitizationPolicy.from_tags(allowed_tags)

    tags = allowed_tags or tuple(rules.get_allowed_tags())
    return SanitizationPolicy.from_tags(
        tags,
        allowed_attributes=rules.get_allowed_attrs() or DEFAULT_ALLOWED_ATTRIBUTES,
        allowed_css_properties=rules.get_allowed_css_properties()
        or DEFAULT_ALLOWED_CSS_PROPERTIES,
        origin=rules.get_origin(),
    )


# --- Component Entry Points ---


def run_sanitize(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
    markup: MarkupPort | None = None,
) -> SanitizeOutput:
    """
    Sanitize markup against the allow-list.

    Args:
        inp: Markup and optional caller tag list.
        rules: Optional rules port for configuration.
        markup: Optional markup port; defaults to the BeautifulSoup adapter.

    Returns:
        SanitizeOutput with cleaned markup and what was removed.
    """
    policy = _build_policy(inp.allowed_tags, rules)
    notices: list[SanitizationNotice] = []
    html = sanitize_html(inp.html, policy=policy, markup_port=markup, notices=notices)

    return SanitizeOutput(html=html, notices=notices, success=True)


def run(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
    markup: MarkupPort | None = None,
) -> SanitizeOutput:
    """Main entry point for the sanitize component."""
    if isinstance(inp, SanitizeHtmlInput):
        return run_sanitize(inp, rules=rules, markup=markup)
    raise ValueError(f"Unknown input type: {type(inp)}")
