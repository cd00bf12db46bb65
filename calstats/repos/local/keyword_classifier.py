"""
Local implementation of the EventClassifierRepository protocol.
Classifies titles by case-insensitive keyword substring matching.
"""

import logging
from typing import Iterable, Mapping, Optional, Tuple

from calstats.domain import CategorizationConfig
from calstats.repositories import (
    EventClassifierRepository,
    MissingCategorizationConfigError,
)

logger = logging.getLogger(__name__)

OTHER_CATEGORY = "other"


def first_keyword_match(
    title: str, rules: Mapping[str, Iterable[str]]
) -> Optional[str]:
    """
    Return the first rule name (in sorted order) with a keyword that is a
    substring of title, or None.

    The result does not depend on the insertion order of rules.
    """
    title = title.lower()
    for name in sorted(rules):
        for keyword in rules[name]:
            if keyword.lower() in title:
                return name
    return None


class KeywordClassifierRepository(EventClassifierRepository):
    """
    Keyword classifier backed by a CategorizationConfig.

    Event rules take precedence over general categories. Within each tier
    the first match in lexicographic rule-name order wins, and titles that
    match nothing fall back to "other".
    """

    def __init__(self, config: Optional[CategorizationConfig]):
        if config is None:
            raise MissingCategorizationConfigError(
                "A categorization config is required to classify events"
            )
        self._config = config
        self._event_keywords = {
            name: rule.keywords
            for name, rule in config.event_categories.items()
        }
        self._category_keywords = {
            name: definition.keywords
            for name, definition in config.categories.items()
        }
        self._page_keywords = {
            name: rule.keywords
            for name, rule in config.notion_categories.items()
        }

    def categorize_event(self, title: str) -> str:
        rule_name, category = self._classify(title)
        logger.debug(
            f"Categorized event '{title}' -> {category}",
            extra={"rule": rule_name, "category": category},
        )
        return category

    def match_event_rule(self, title: str) -> Optional[str]:
        return first_keyword_match(title, self._event_keywords)

    def categorize_time_bucket(self, title: str) -> str:
        return (
            first_keyword_match(title, self._category_keywords)
            or OTHER_CATEGORY
        )

    def categorize_page(self, title: str) -> str:
        return (
            first_keyword_match(title, self._page_keywords) or OTHER_CATEGORY
        )

    def display_name(self, category: str) -> str:
        definition = self._config.categories.get(category)
        if definition is not None:
            return definition.name
        return category.title()

    def _classify(self, title: str) -> Tuple[Optional[str], str]:
        rule_name = self.match_event_rule(title)
        if rule_name is not None:
            return rule_name, self._config.event_categories[rule_name].category

        category = first_keyword_match(title, self._category_keywords)
        if category is not None:
            return None, category

        return None, OTHER_CATEGORY
