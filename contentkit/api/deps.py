import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from contentkit.adapters.markup import SoupMarkupAdapter, create_markup_adapter
from contentkit.adapters.rules import RulesAdapter
from contentkit.rules.loader import load_rules
from contentkit.rules.models import ContentRules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("CONTENTKIT_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> ContentRules:
    return load_rules(settings.rules_path)


def get_rules_port(rules: ContentRules = Depends(get_rules)) -> RulesAdapter:
    return RulesAdapter(rules)


# --- Markup ---
def get_markup(rules: RulesAdapter = Depends(get_rules_port)) -> SoupMarkupAdapter:
    return create_markup_adapter(rules.get_max_depth())
