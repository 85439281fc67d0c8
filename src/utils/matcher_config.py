# -*- coding: utf-8 -*-
"""Centralized configuration for the title matcher.

Reads scoring weights, catalog column names, extra vocabulary and output
directories from matcher.toml. Anything missing from the file falls back to
the defaults in src/modules/title_matching/constants.py.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomllib

from src.modules.title_matching.constants import (
    DEFAULT_CATALOG_COLUMNS,
    VOCABULARY_CATEGORIES,
)
from src.modules.title_matching.models import MatchWeights
from src.utils import get_workspace_root

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "matcher.toml"


class MatcherConfig:
    """Matcher configuration.

    Usage:
        config = MatcherConfig()
        result = get_best_match(title, products, weights=config.weights)
        output_dir = config.output_dir
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        """Initialize MatcherConfig from matcher.toml.

        Args:
            config_path: Path to matcher.toml. If None, uses the workspace root.
            data: Already-parsed config; skips reading any file when given.

        Raises:
            FileNotFoundError: If config file not found.
            ValueError: If [weights] contains unknown keys.
        """
        if data is None:
            if config_path is None:
                config_path = get_workspace_root() / DEFAULT_CONFIG_NAME

            config_path = Path(config_path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            with open(config_path, "rb") as f:
                data = tomllib.load(f)

        self._config = data
        self.config_path = config_path
        self.weights = MatchWeights.from_dict(self._config.get("weights", {}))
        self.catalog_columns = self._load_catalog_columns()
        self.vocabulary_categories = self._load_vocabulary()

        dirs = self._config.get("dirs", {})
        self.output_dir = Path(dirs.get("output", "data/keywords"))
        self.lineage_dir = Path(dirs.get("lineage", "data/lineage"))

        logger.debug(f"Loaded matcher config from {config_path}")

    def _load_catalog_columns(self) -> Dict[str, str]:
        columns = self._config.get("catalog", {}).get("columns", {})
        unknown = sorted(set(columns) - set(DEFAULT_CATALOG_COLUMNS))
        if unknown:
            logger.warning(f"Ignoring unknown catalog column keys: {unknown}")
        return {
            key: columns.get(key, default)
            for key, default in DEFAULT_CATALOG_COLUMNS.items()
        }

    def _load_vocabulary(self) -> Dict[str, List[str]]:
        """Merge [vocabulary.<category>] words into the default tables.

        New categories are appended after the built-in ones.
        """
        merged = {
            category: list(words) for category, words in VOCABULARY_CATEGORIES.items()
        }
        for category, table in self._config.get("vocabulary", {}).items():
            words = table.get("words", []) if isinstance(table, dict) else table
            existing = merged.setdefault(category, [])
            existing.extend(word for word in words if word not in existing)
        return merged

    def get(self, section: str, default: Any = None) -> Any:
        """Raw access to a top-level config section."""
        return self._config.get(section, default)


def load_matcher_config(config_path: Optional[Path] = None) -> MatcherConfig:
    """Load matcher.toml, or built-in defaults when no file exists at the
    default location.

    An explicit config_path that does not exist is an error.

    Raises:
        FileNotFoundError: If an explicit config_path is missing.
    """
    if config_path is None:
        default_path = get_workspace_root() / DEFAULT_CONFIG_NAME
        if not default_path.exists():
            logger.info(f"{DEFAULT_CONFIG_NAME} not found, using built-in defaults")
            return MatcherConfig(data={})
        config_path = default_path
    return MatcherConfig(config_path)

