"""
Mock implementation of CategorizationConfigRepository for development and
testing.
"""

import logging
from typing import Optional

from calstats.domain import (
    CategorizationConfig,
    CategoryDefinition,
    EventRule,
    NotionRule,
)
from calstats.repositories import (
    CategorizationConfigRepository,
    MissingCategorizationConfigError,
)

logger = logging.getLogger(__name__)


def default_mock_config() -> CategorizationConfig:
    """A small English rule set covering every section."""
    return CategorizationConfig(
        categories={
            "meeting": CategoryDefinition(
                name="Meeting time",
                keywords=["mtg", "meeting", "standup", "1on1", "sync"],
            ),
            "focus": CategoryDefinition(
                name="Focus time", keywords=["focus", "block", "dev"]
            ),
            "learning": CategoryDefinition(
                name="Learning time", keywords=["training", "study"]
            ),
            "admin": CategoryDefinition(
                name="Admin time", keywords=["admin", "expenses"]
            ),
        },
        event_categories={
            "1on1 meetings": EventRule(keywords=["1on1"], category="meeting"),
            "daily standups": EventRule(
                keywords=["standup"], category="meeting"
            ),
            "focus work": EventRule(
                keywords=["focus", "block"], category="focus"
            ),
            "time off": EventRule(
                keywords=["vacation", "holiday"], category="other"
            ),
        },
        notion_categories={
            "meeting notes": NotionRule(keywords=["meeting", "mtg"]),
            "technical documentation": NotionRule(
                keywords=["api", "design"]
            ),
        },
    )


class MockCategorizationConfigRepository(CategorizationConfigRepository):
    """
    Mock implementation of CategorizationConfigRepository that serves an
    in-memory rule set. Passing ``config=None`` with ``missing=True``
    simulates an absent configuration.
    """

    def __init__(
        self,
        config: Optional[CategorizationConfig] = None,
        missing: bool = False,
    ):
        self._config = None if missing else (config or default_mock_config())
        logger.debug(
            "Initialized MockCategorizationConfigRepository",
            extra={"missing": missing},
        )

    def load_config(self) -> CategorizationConfig:
        if self._config is None:
            raise MissingCategorizationConfigError(
                "Mock categorization config is not available"
            )
        return self._config
