"""
ProfileReport model representing a diagnostic pass over a dataset (ephemeral).
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class NumericRange(BaseModel):
    """Min/max/avg over the values of a field that parse as numbers."""

    minimum: float | None = None
    maximum: float | None = None
    average: float | None = None

    def as_tuple(self) -> tuple[float | None, float | None, float | None]:
        return (self.minimum, self.maximum, self.average)


class ProfileReport(BaseModel):
    """
    Outcome of profiling a table (not persisted).

    Attributes:
        table: Table or label the profile was taken from
        record_count: Total number of records
        missing_counts: Null or blank values per critical field
        numeric_ranges: Range per numeric field
        malformed_titles: Titles containing an encoding-artifact marker
    """

    table: str
    record_count: int = Field(..., ge=0)
    missing_counts: Dict[str, int] = Field(default_factory=dict)
    numeric_ranges: Dict[str, NumericRange] = Field(default_factory=dict)
    malformed_titles: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "table": "movies_raw",
                "record_count": 5043,
                "missing_counts": {"title": 0, "release_year": 108, "rating": 0},
                "numeric_ranges": {
                    "rating": {"minimum": 1.6, "maximum": 9.5, "average": 6.44}
                },
                "malformed_titles": ["Avatar?"]
            }
        }
