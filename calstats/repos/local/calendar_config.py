"""
Local YAML-based implementation of CategorizationConfigRepository.
"""

import logging
import yaml
from pathlib import Path

from pydantic import ValidationError

from calstats.domain import CategorizationConfig
from calstats.repositories import (
    CategorizationConfigRepository,
    MissingCategorizationConfigError,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/categorization.yaml"


class LocalCategorizationConfigRepository(CategorizationConfigRepository):
    """
    Local YAML file implementation of CategorizationConfigRepository.

    Loads the keyword rule set from a YAML file with ``categories``,
    ``event_categories`` and ``notion_categories`` sections. There is no
    built-in fallback: any problem with the file is reported as
    MissingCategorizationConfigError.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize with path to configuration file.

        Args:
            config_path: Path to YAML configuration file, supports ~ expansion
        """
        self.config_path = Path(config_path).expanduser()
        logger.debug(
            f"Initialized LocalCategorizationConfigRepository with path: "
            f"{self.config_path}"
        )

    def load_config(self) -> CategorizationConfig:
        """Load and validate the rule set from the YAML file."""
        if not self.config_path.exists():
            raise MissingCategorizationConfigError(
                f"Configuration file {self.config_path} not found. "
                f"Please create this file with categorization rules"
            )

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise MissingCategorizationConfigError(
                f"Failed to read config file {self.config_path}: {e}"
            ) from e

        if not config_data:
            raise MissingCategorizationConfigError(
                f"Configuration file is empty: {self.config_path}"
            )

        if not isinstance(config_data, dict):
            raise MissingCategorizationConfigError(
                f"Configuration file must contain a YAML dictionary: "
                f"{self.config_path}"
            )

        try:
            config = CategorizationConfig.model_validate(config_data)
        except ValidationError as e:
            raise MissingCategorizationConfigError(
                f"Failed to parse config file {self.config_path}: {e}"
            ) from e

        logger.info(
            f"Loaded categorization rules from {self.config_path}",
            extra={
                "category_count": len(config.categories),
                "event_rule_count": len(config.event_categories),
                "notion_rule_count": len(config.notion_categories),
            },
        )
        return config
