"""
CleanRecord model representing one deduplicated, typed and categorized movie.
"""

from pydantic import BaseModel, Field


class CleanRecord(BaseModel):
    """
    One movie per identity group after normalization and categorization.

    Numeric fields hold a real number or None, never a blank string.
    Category fields are always set; a missing source value maps to the
    band set's absent label ("Unknown" / "Not Rated").

    Passthrough columns are kept as extra fields.
    """

    title: str | None = None
    duration: int | None = None
    director_popularity: int | None = None
    lead_actor_popularity: int | None = None
    gross: int | None = None
    budget: int | None = None
    release_year: int | None = None
    rating: float | None = None
    budget_category: str = Field(..., min_length=1)
    gross_category: str = Field(..., min_length=1)
    duration_category: str = Field(..., min_length=1)
    rating_category: str = Field(..., min_length=1)

    class Config:
        extra = "allow"
        json_schema_extra = {
            "example": {
                "title": "Avatar",
                "duration": 178,
                "director_popularity": 0,
                "lead_actor_popularity": 1000,
                "gross": 760505847,
                "budget": 237000000,
                "release_year": 2009,
                "rating": 7.9,
                "budget_category": "Blockbuster Budget",
                "gross_category": "Blockbuster",
                "duration_category": "Epic Length",
                "rating_category": "Good",
            }
        }
