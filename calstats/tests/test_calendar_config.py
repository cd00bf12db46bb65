"""
Tests for the YAML and mock categorization config repositories.
"""

from pathlib import Path

import pytest
import yaml

from calstats.repos.local.calendar_config import (
    LocalCategorizationConfigRepository,
)
from calstats.repos.mock.calendar_config import (
    MockCategorizationConfigRepository,
)
from calstats.repositories import (
    CategorizationConfigRepository,
    MissingCategorizationConfigError,
)

REPO_ROOT = Path(__file__).resolve().parents[2]


class TestLocalCategorizationConfigRepository:
    def test_implements_protocol(self, tmp_path: Path) -> None:
        repo = LocalCategorizationConfigRepository(str(tmp_path / "x.yaml"))
        assert isinstance(repo, CategorizationConfigRepository)

    def test_loads_all_sections(
        self, tmp_path: Path, categorization_yaml
    ) -> None:
        path = tmp_path / "categorization.yaml"
        path.write_text(yaml.safe_dump(categorization_yaml), encoding="utf-8")

        config = LocalCategorizationConfigRepository(str(path)).load_config()

        assert config.categories["meeting"].name == "Meeting time"
        # keywords are normalised to lowercase
        assert config.categories["meeting"].keywords == ["mtg", "sync"]
        assert config.event_categories["daily standups"].category == "meeting"
        assert config.notion_categories["meeting notes"].keywords == ["notes"]

    def test_missing_sections_default_to_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "categorization.yaml"
        path.write_text(
            "categories:\n  focus:\n    name: Focus\n    keywords: [focus]\n",
            encoding="utf-8",
        )

        config = LocalCategorizationConfigRepository(str(path)).load_config()

        assert config.event_categories == {}
        assert config.notion_categories == {}

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "- just\n- a list\n",
            "categories: [1, 2\n",
            "event_categories:\n  broken:\n    keywords: [x]\n",
        ],
    )
    def test_invalid_files_are_fatal(
        self, tmp_path: Path, content: str
    ) -> None:
        path = tmp_path / "categorization.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(MissingCategorizationConfigError):
            LocalCategorizationConfigRepository(str(path)).load_config()

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        repo = LocalCategorizationConfigRepository(
            str(tmp_path / "absent.yaml")
        )
        with pytest.raises(MissingCategorizationConfigError, match="not found"):
            repo.load_config()

    def test_shipped_sample_config_loads(self) -> None:
        path = REPO_ROOT / "config" / "categorization.yaml"
        config = LocalCategorizationConfigRepository(str(path)).load_config()

        assert set(config.categories) == {
            "meeting",
            "focus",
            "learning",
            "admin",
        }
        for rule in config.event_categories.values():
            assert rule.category in set(config.categories) | {"other"}


class TestMockCategorizationConfigRepository:
    def test_serves_default_config(self) -> None:
        config = MockCategorizationConfigRepository().load_config()
        assert "meeting" in config.categories

    def test_missing(self) -> None:
        with pytest.raises(MissingCategorizationConfigError):
            MockCategorizationConfigRepository(missing=True).load_config()
