import pytest
from typing import Any, Dict

from calstats.domain import CategorizationConfig
from calstats.repos.local.keyword_classifier import (
    KeywordClassifierRepository,
)
from calstats.repos.mock.calendar_config import default_mock_config


@pytest.fixture
def categorization_config() -> CategorizationConfig:
    """Provide the in-memory rule set used by the mock config repository."""
    return default_mock_config()


@pytest.fixture
def classifier(
    categorization_config: CategorizationConfig,
) -> KeywordClassifierRepository:
    """Provide a keyword classifier over the mock rule set."""
    return KeywordClassifierRepository(categorization_config)


@pytest.fixture
def categorization_yaml() -> Dict[str, Any]:
    """Provide raw YAML-shaped categorization data."""
    return {
        "categories": {
            "meeting": {"name": "Meeting time", "keywords": ["MTG", "sync"]},
            "focus": {"name": "Focus time", "keywords": ["focus"]},
        },
        "event_categories": {
            "daily standups": {"keywords": ["standup"], "category": "meeting"},
        },
        "notion_categories": {
            "meeting notes": {"keywords": ["notes"]},
        },
    }
