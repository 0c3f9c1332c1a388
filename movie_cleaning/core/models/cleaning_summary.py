"""
CleaningSummary model representing the outcome of one pipeline run (ephemeral).
"""

from typing import Dict

from pydantic import BaseModel, Field


class CleaningSummary(BaseModel):
    """
    Counts that show how far a run moved the data.

    Attributes:
        raw_table: Table the run read from
        clean_table: Table the run wrote
        view_name: Published analysis view
        original_count: Records in the raw snapshot
        cleaned_count: Records in the clean table
        duplicates_removed: Records dropped by identity grouping
        backfilled: Values filled from the backfill table, per field
        still_missing_runtime: Clean records without a duration
        still_missing_gross: Clean records without a gross
    """

    raw_table: str
    clean_table: str
    view_name: str
    original_count: int = Field(..., ge=0)
    cleaned_count: int = Field(..., ge=0)
    duplicates_removed: int = Field(..., ge=0)
    backfilled: Dict[str, int] = Field(default_factory=dict)
    still_missing_runtime: int = Field(0, ge=0)
    still_missing_gross: int = Field(0, ge=0)

    @property
    def backfilled_count(self) -> int:
        return sum(self.backfilled.values())
