"""
CategoryBand and CategoryBandSet models describing threshold categorization.
"""

import math
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator


class CategoryBand(BaseModel):
    """
    One labelled band of a numeric field.

    A band sets at most one upper bound:
        below: value < below
        up_to: value <= up_to
    A band with neither bound catches every remaining value and must be last.
    """

    label: str = Field(..., min_length=1)
    below: float | None = None
    up_to: float | None = None

    @model_validator(mode="after")
    def check_single_bound(self) -> "CategoryBand":
        if self.below is not None and self.up_to is not None:
            raise ValueError(f"Band '{self.label}' sets both 'below' and 'up_to'")
        return self

    @property
    def limit(self) -> float | None:
        """Upper bound of the band, None for the catch-all band."""
        return self.below if self.below is not None else self.up_to

    def contains(self, value: float) -> bool:
        if self.below is not None:
            return value < self.below
        if self.up_to is not None:
            return value <= self.up_to
        return True


class CategoryBandSet(BaseModel):
    """
    Ordered bands for one numeric field.

    Bands are tried in order and the first match wins, so a value falling
    between two listed cutoffs lands in the next band up.

    Attributes:
        field_name: Numeric column the bands apply to
        category_field: Column receiving the label
        absent_label: Label for a missing value
        bands: Bands ordered by ascending upper bound, catch-all last
    """

    field_name: str = Field(..., min_length=1)
    category_field: str = Field(..., min_length=1)
    absent_label: str = Field("Unknown", min_length=1)
    bands: List[CategoryBand] = Field(..., min_length=1)

    @field_validator("bands")
    @classmethod
    def check_band_order(cls, v: List[CategoryBand]) -> List[CategoryBand]:
        """Every band but the last is bounded, and bounds never decrease."""
        if v[-1].limit is not None:
            raise ValueError("The last band must be unbounded")

        previous = None
        for band in v[:-1]:
            if band.limit is None:
                raise ValueError(f"Only the last band may be unbounded, got '{band.label}'")
            if previous is not None and band.limit < previous:
                raise ValueError(
                    f"Band '{band.label}' bound {band.limit} is below the previous bound {previous}"
                )
            previous = band.limit
        return v

    def label_for(self, value: float | None) -> str:
        """
        Return the label for a value.

        Args:
            value: Numeric value, or None when absent

        Returns:
            Band label, or absent_label for None/NaN
        """
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return self.absent_label

        for band in self.bands:
            if band.contains(value):
                return band.label

        return self.bands[-1].label

    @property
    def labels(self) -> list[str]:
        """All labels this set can produce, absent label included."""
        return [band.label for band in self.bands] + [self.absent_label]

    class Config:
        json_schema_extra = {
            "example": {
                "field_name": "budget",
                "category_field": "budget_category",
                "absent_label": "Unknown",
                "bands": [
                    {"label": "Low Budget", "below": 10000000},
                    {"label": "Medium Budget", "up_to": 50000000},
                    {"label": "High Budget", "up_to": 100000000},
                    {"label": "Blockbuster Budget"}
                ]
            }
        }
