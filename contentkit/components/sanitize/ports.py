"""
Sanitize component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RulesPort(Protocol):
    """Port for accessing sanitizer rules configuration."""

    def get_allowed_tags(self) -> frozenset[str]:
        """Get allowed HTML tags. Empty means the built-in default."""
        ...

    def get_allowed_attrs(self) -> dict[str, frozenset[str]]:
        """Get allowed attributes per tag. Empty means the built-in default."""
        ...

    def get_allowed_css_properties(self) -> frozenset[str]:
        """Get allowed CSS properties. Empty means the built-in default."""
        ...

    def get_origin(self) -> str | None:
        """Get the origin links are compared against."""
        ...
