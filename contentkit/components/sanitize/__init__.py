"""
Sanitize component - allow-list HTML sanitizer.
"""

from ._impl import (
    DEFAULT_ALLOWED_ATTRIBUTES,
    DEFAULT_ALLOWED_CSS_PROPERTIES,
    DEFAULT_ALLOWED_TAGS,
    DEFAULT_POLICY,
    LINK_REL,
    SanitizationPolicy,
    clean_style,
    is_external_url,
    is_safe_css_value,
    is_unsafe_url,
    parse_style,
    sanitize,
    sanitize_html,
)
from .component import run, run_sanitize
from .models import SanitizationNotice, SanitizeHtmlInput, SanitizeOutput
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_sanitize",
    # Models
    "SanitizeHtmlInput",
    "SanitizeOutput",
    "SanitizationNotice",
    # Ports
    "RulesPort",
    # Policy
    "SanitizationPolicy",
    "DEFAULT_POLICY",
    "DEFAULT_ALLOWED_TAGS",
    "DEFAULT_ALLOWED_ATTRIBUTES",
    "DEFAULT_ALLOWED_CSS_PROPERTIES",
    "LINK_REL",
    # Functions
    "sanitize",
    "sanitize_html",
    "parse_style",
    "clean_style",
    "is_safe_css_value",
    "is_unsafe_url",
    "is_external_url",
]
