"""
PipelineConfig model holding the table names and cleaning rules of a run.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, Field, model_validator

NumericType = Literal["int", "bigint", "double"]


class MagnitudeCorrection(BaseModel):
    """
    Known scale-entry error: values above threshold are divided by divisor.
    """

    field_name: str = "budget"
    threshold: float = Field(1_000_000_000, gt=0)
    divisor: float = Field(10, gt=0)


def _default_identity_fields() -> list[str]:
    return [
        "title",
        "release_year",
        "director_popularity",
        "lead_actor_popularity",
        "gross",
        "budget",
        "rating",
    ]


def _default_coerced_fields() -> dict[str, str]:
    return {
        "duration": "int",
        "director_popularity": "bigint",
        "lead_actor_popularity": "bigint",
        "gross": "bigint",
        "budget": "bigint",
        "release_year": "int",
        "rating": "double",
    }


class PipelineConfig(BaseModel):
    """
    Settings for one cleaning run.

    Attributes:
        raw_table: Catalog table holding raw records
        clean_table: Catalog table receiving clean records
        view_name: Name of the published analysis view
        store_mode: "temp" (cached temp view) or "managed" (saveAsTable)
        identity_fields: Fields whose combined value identifies a movie
        coerced_fields: Fields parsed to numbers, with their Spark SQL type
        quote_stripped_fields: Fields with embedded quotes removed (all coerced fields if None)
        title_artifacts: Substrings removed from titles, in order
        malformed_title_markers: Characters the profiler flags in titles
        critical_fields: Fields the profiler counts missing values for
        magnitude_correction: Known scale-entry fix
        bands_path: Category band YAML (packaged default if None)
        backfill_path: Backfill table YAML (packaged default if None)
    """

    raw_table: str = "movies_raw"
    clean_table: str = "movies_clean"
    view_name: str = "ready_for_analysis"
    store_mode: Literal["temp", "managed"] = "temp"
    identity_fields: List[str] = Field(default_factory=_default_identity_fields, min_length=1)
    coerced_fields: Dict[str, NumericType] = Field(default_factory=_default_coerced_fields)
    quote_stripped_fields: List[str] | None = None
    title_artifacts: List[str] = Field(default_factory=lambda: ["?", "??"])
    malformed_title_markers: List[str] = Field(default_factory=lambda: ["?", "\""])
    critical_fields: List[str] = Field(
        default_factory=lambda: ["title", "release_year", "rating", "duration", "gross"]
    )
    magnitude_correction: MagnitudeCorrection = Field(default_factory=MagnitudeCorrection)
    bands_path: str | None = None
    backfill_path: str | None = None

    @model_validator(mode="after")
    def check_magnitude_field(self) -> "PipelineConfig":
        if self.magnitude_correction.field_name not in self.coerced_fields:
            raise ValueError(
                f"Magnitude correction field '{self.magnitude_correction.field_name}' "
                "must be one of the coerced fields"
            )
        return self

    @model_validator(mode="after")
    def default_quote_stripped_fields(self) -> "PipelineConfig":
        # Any numeric-as-text field may carry quotes
        if self.quote_stripped_fields is None:
            self.quote_stripped_fields = list(self.coerced_fields)
        return self

    @property
    def numeric_fields(self) -> list[str]:
        return list(self.coerced_fields)
