"""
RawRecord model representing one movie row exactly as ingested.
"""

from typing import Any

from pydantic import BaseModel, field_validator


class RawRecord(BaseModel):
    """
    One movie row exactly as ingested (immutable, loosely typed).

    Every field is text or missing. Numbers may carry quote characters,
    titles may carry stray question marks, and any field may be blank.

    Attributes:
        title: Movie title
        duration: Runtime in minutes
        director_popularity: Director social-media likes
        lead_actor_popularity: Lead actor social-media likes
        gross: Gross revenue
        budget: Production budget
        release_year: Year of release
        rating: IMDB score
        (passthrough columns are accepted as extra fields)
    """

    title: str | None = None
    duration: str | None = None
    director_popularity: str | None = None
    lead_actor_popularity: str | None = None
    gross: str | None = None
    budget: str | None = None
    release_year: str | None = None
    rating: str | None = None
    critic_review_count: str | None = None
    user_review_count: str | None = None
    voted_user_count: str | None = None
    cast_total_popularity: str | None = None
    poster_face_count: str | None = None
    supporting_actor_popularity: str | None = None
    third_actor_popularity: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str | None:
        """Raw values are text; numbers handed in by callers become text too."""
        if v is None:
            return None
        return str(v)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "title": "Avatar?",
                "duration": "178",
                "director_popularity": "\"0\"",
                "lead_actor_popularity": "1000",
                "gross": "760505847",
                "budget": "237000000",
                "release_year": "2009",
                "rating": "7.9",
            }
        }
