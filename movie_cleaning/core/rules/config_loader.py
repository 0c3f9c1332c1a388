"""
Cleaning rule configuration management.

Loads category bands, the backfill table and run settings from YAML files
and turns them into validated models.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from movie_cleaning.core.models import (
    BackfillCorrection,
    CategoryBandSet,
    MagnitudeCorrection,
    PipelineConfig,
)

PACKAGE_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

CONFIG_ENV_VAR = "MOVIE_CLEANING_CONFIG"


def default_config_path(filename: str) -> Path:
    """Path of a config file shipped with the package."""
    return PACKAGE_CONFIG_DIR / filename


class _YamlConfigLoader:
    """Shared file handling for the YAML loaders."""

    section: str = ""

    def __init__(self, config_path: str | Path):
        """
        Initialize the loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

    def _read(self) -> dict[str, Any]:
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
        return config or {}

    def _load_section(self) -> Any:
        config = self._read()
        if self.section not in config:
            raise ValueError(f"Configuration file must contain '{self.section}' section")
        return config[self.section]


class CategoryBandLoader(_YamlConfigLoader):
    """
    Loads category bands from YAML.

    Expected YAML format:
    ```yaml
    categories:
      budget:
        category_field: budget_category
        absent_label: Unknown
        bands:
          - label: Low Budget
            below: 10000000
          - label: Medium Budget
            up_to: 50000000
          - label: Blockbuster Budget
    ```
    """

    section = "categories"

    def load_band_sets(self) -> list[CategoryBandSet]:
        """
        Load and parse the band sets.

        Returns:
            One CategoryBandSet per configured field, in file order

        Raises:
            ValueError: If the section is missing or malformed
            pydantic.ValidationError: If a band definition is invalid
        """
        categories = self._load_section()
        if not isinstance(categories, dict):
            raise ValueError("'categories' must map field names to band definitions")

        band_sets = []
        for field_name, definition in categories.items():
            if not isinstance(definition, dict):
                raise ValueError(f"Category definition for field '{field_name}' must be a mapping")

            band_sets.append(CategoryBandSet(
                field_name=field_name,
                category_field=definition.get("category_field", f"{field_name}_category"),
                absent_label=definition.get("absent_label", "Unknown"),
                bands=definition.get("bands") or [],
            ))

        return band_sets


class BackfillConfigLoader(_YamlConfigLoader):
    """
    Loads the closed list of backfill corrections from YAML.

    Expected YAML format:
    ```yaml
    corrections:
      - title: "The Dark Knight Rises"
        field: duration
        value: 165
    ```
    """

    section = "corrections"

    def load_corrections(self) -> list[BackfillCorrection]:
        """
        Load and parse the corrections.

        Returns:
            List of BackfillCorrection, possibly empty

        Raises:
            ValueError: If the section is missing or an entry lacks a key
        """
        entries = self._load_section() or []
        if not isinstance(entries, list):
            raise ValueError("'corrections' must be a list")

        corrections = []
        for idx, entry in enumerate(entries):
            missing = [key for key in ("title", "field", "value") if key not in entry]
            if missing:
                raise ValueError(f"Correction #{idx} is missing {', '.join(missing)}")

            corrections.append(BackfillCorrection(
                title=entry["title"],
                field_name=entry["field"],
                value=entry["value"],
            ))

        return corrections


class PipelineConfigLoader(_YamlConfigLoader):
    """
    Loads run settings from YAML. Every section is optional; missing
    sections keep the PipelineConfig defaults.
    """

    def load(self) -> PipelineConfig:
        """
        Load and parse the run settings.

        Returns:
            PipelineConfig with band/backfill paths resolved against the
            config file's directory
        """
        config = self._read()
        settings: dict[str, Any] = {}

        tables = config.get("tables", {})
        for yaml_key, model_key in (
            ("raw", "raw_table"),
            ("clean", "clean_table"),
            ("view", "view_name"),
            ("store_mode", "store_mode"),
        ):
            if yaml_key in tables:
                settings[model_key] = tables[yaml_key]

        for key in (
            "identity_fields",
            "coerced_fields",
            "quote_stripped_fields",
            "title_artifacts",
            "malformed_title_markers",
            "critical_fields",
        ):
            if key in config:
                settings[key] = config[key]

        if "magnitude_correction" in config:
            magnitude = dict(config["magnitude_correction"])
            if "field" in magnitude:
                magnitude["field_name"] = magnitude.pop("field")
            settings["magnitude_correction"] = MagnitudeCorrection(**magnitude)

        for key in ("bands_path", "backfill_path"):
            if config.get(key):
                settings[key] = str(self._resolve(config[key]))

        return PipelineConfig(**settings)

    def _resolve(self, path_value: str) -> Path:
        path = Path(path_value)
        if path.is_absolute():
            return path
        return (self.config_path.parent / path).resolve()


class BackfillTableBuilder:
    """
    Programmatically build a backfill table (for testing or ad-hoc runs).
    """

    def __init__(self):
        self.corrections: list[BackfillCorrection] = []

    def add(self, title: str, field_name: str, value: int | float) -> "BackfillTableBuilder":
        """Add a correction."""
        self.corrections.append(BackfillCorrection(title=title, field_name=field_name, value=value))
        return self

    def build(self) -> list[BackfillCorrection]:
        """Build and return the backfill table."""
        return self.corrections


def load_pipeline_config(config_path: str | Path | None = None) -> PipelineConfig:
    """
    Load run settings from a path, the MOVIE_CLEANING_CONFIG env var,
    or the packaged default, in that order.
    """
    path = config_path or os.getenv(CONFIG_ENV_VAR) or default_config_path("pipeline.yaml")
    return PipelineConfigLoader(path).load()


def load_band_sets(config: PipelineConfig) -> list[CategoryBandSet]:
    """Band sets named by a config, or the packaged defaults."""
    path = config.bands_path or default_config_path("category_bands.yaml")
    return CategoryBandLoader(path).load_band_sets()


def load_backfill_table(config: PipelineConfig) -> list[BackfillCorrection]:
    """Backfill table named by a config, or the packaged default."""
    path = config.backfill_path or default_config_path("backfill_corrections.yaml")
    return BackfillConfigLoader(path).load_corrections()
