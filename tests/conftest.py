from pathlib import Path

import pytest

from contentkit.adapters.markup import SoupMarkupAdapter
from contentkit.adapters.rules import RulesAdapter
from contentkit.rules.loader import load_rules
from contentkit.rules.models import ContentRules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules_path() -> Path:
    """The project's rules file."""
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules(rules_path: Path) -> ContentRules:
    """Load REAL rules from project root (fail fast if missing)."""
    return load_rules(rules_path)


@pytest.fixture
def rules_port(rules: ContentRules) -> RulesAdapter:
    return RulesAdapter(rules)


@pytest.fixture
def markup() -> SoupMarkupAdapter:
    return SoupMarkupAdapter()
