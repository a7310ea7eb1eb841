"""
Sanitize component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Notices ---


@dataclass(frozen=True)
class SanitizationNotice:
    """Something the sanitizer removed. Informational only."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SanitizeHtmlInput:
    """Input for sanitizing pasted or programmatically inserted markup."""

    html: str
    allowed_tags: tuple[str, ...] = ()


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeOutput:
    """Output for sanitized markup."""

    html: str
    notices: list[SanitizationNotice] = field(default_factory=list)
    success: bool = True
