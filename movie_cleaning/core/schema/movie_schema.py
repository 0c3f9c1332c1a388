"""
Column layout of the movie dataset at each pipeline stage.

Raw records arrive with every column as text. The clean table keeps the same
columns with numeric fields typed and four category columns appended.
"""

from pyspark.sql.types import StringType, StructField, StructType

TITLE = "title"
DURATION = "duration"
DIRECTOR_POPULARITY = "director_popularity"
LEAD_ACTOR_POPULARITY = "lead_actor_popularity"
GROSS = "gross"
BUDGET = "budget"
RELEASE_YEAR = "release_year"
RATING = "rating"

# Carried through to the clean table untouched
PASSTHROUGH_FIELDS = [
    "critic_review_count",
    "user_review_count",
    "voted_user_count",
    "cast_total_popularity",
    "poster_face_count",
    "supporting_actor_popularity",
    "third_actor_popularity",
]

CORE_FIELDS = [
    TITLE,
    DURATION,
    DIRECTOR_POPULARITY,
    LEAD_ACTOR_POPULARITY,
    GROSS,
    BUDGET,
    RELEASE_YEAR,
    RATING,
]

RAW_FIELDS = CORE_FIELDS + PASSTHROUGH_FIELDS

# Column names used by the IMDB 5000 export the raw table is usually loaded from
ORIGINAL_COLUMN_ALIASES = {
    "movie_title": TITLE,
    "director_facebook_likes": DIRECTOR_POPULARITY,
    "actor_1_facebook_likes": LEAD_ACTOR_POPULARITY,
    "title_year": RELEASE_YEAR,
    "imdb_score": RATING,
    "num_critic_for_reviews": "critic_review_count",
    "num_user_for_reviews": "user_review_count",
    "num_voted_users": "voted_user_count",
    "cast_total_facebook_likes": "cast_total_popularity",
    "facenumber_in_poster": "poster_face_count",
    "actor_2_facebook_likes": "supporting_actor_popularity",
    "actor_3_facebook_likes": "third_actor_popularity",
}

BUDGET_CATEGORY = "budget_category"
GROSS_CATEGORY = "gross_category"
DURATION_CATEGORY = "duration_category"
RATING_CATEGORY = "rating_category"

CATEGORY_FIELDS = [BUDGET_CATEGORY, GROSS_CATEGORY, DURATION_CATEGORY, RATING_CATEGORY]

# Internal workspace columns, never part of the clean table
DUPLICATE_RANK = "duplicate_rank"
SOURCE_ORDER = "_source_order"

ANALYSIS_VIEW_COLUMNS = [
    TITLE,
    DURATION,
    DURATION_CATEGORY,
    BUDGET,
    BUDGET_CATEGORY,
    GROSS,
    GROSS_CATEGORY,
    RATING,
    RATING_CATEGORY,
    DIRECTOR_POPULARITY,
    RELEASE_YEAR,
]

RAW_SCHEMA = StructType([StructField(name, StringType(), True) for name in RAW_FIELDS])


def canonical_column_name(name: str) -> str:
    """Map an original export column name to its canonical name."""
    normalized = name.strip().lower()
    return ORIGINAL_COLUMN_ALIASES.get(normalized, normalized)
