"""
BackfillCorrection model representing one known-missing value.
"""

from pydantic import BaseModel, Field


class BackfillCorrection(BaseModel):
    """
    A known value for a field that is missing on one specific title.

    Applied only where the title matches exactly and the field is absent.

    Attributes:
        title: Exact (cleaned) title to match
        field_name: Field to fill
        value: Value to set
    """

    title: str = Field(..., min_length=1)
    field_name: str = Field(..., min_length=1)
    value: int | float

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "title": "The Dark Knight Rises",
                "field_name": "duration",
                "value": 165
            }
        }
