"""
Rules adapter.

Exposes loaded ContentRules through the sanitize component's RulesPort.
Empty lists in the rules file mean "use the built-in default".
"""

from __future__ import annotations

from dataclasses import dataclass

from contentkit.rules.models import ContentRules


@dataclass(frozen=True)
class RulesAdapter:
    rules: ContentRules

    def get_allowed_tags(self) -> frozenset[str]:
        return frozenset(self.rules.sanitizer.allowed_tags)

    def get_allowed_attrs(self) -> dict[str, frozenset[str]]:
        return {
            tag: frozenset(attrs) for tag, attrs in self.rules.sanitizer.allowed_attributes.items()
        }

    def get_allowed_css_properties(self) -> frozenset[str]:
        return frozenset(self.rules.sanitizer.allowed_css_properties)

    def get_origin(self) -> str | None:
        return self.rules.sanitizer.origin

    def get_max_depth(self) -> int:
        return self.rules.markup.max_depth
