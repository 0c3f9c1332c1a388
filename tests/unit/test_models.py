"""
Unit tests for Pydantic models.
"""

import pytest
from pydantic import ValidationError

from movie_cleaning.core.models import (
    BackfillCorrection,
    CategoryBand,
    CategoryBandSet,
    CleaningSummary,
    CleanRecord,
    MagnitudeCorrection,
    PipelineConfig,
    ProfileReport,
    RawRecord,
)


@pytest.mark.unit
class TestRawRecord:
    """Tests for RawRecord model"""

    def test_fields_default_to_missing(self):
        """Test every field is optional"""
        record = RawRecord()
        assert record.title is None
        assert record.budget is None

    def test_numbers_are_kept_as_text(self):
        """Test numeric input is stored as its text form"""
        record = RawRecord(title="Avatar?", budget=237000000, rating=7.9)
        assert record.budget == "237000000"
        assert record.rating == "7.9"
        assert record.title == "Avatar?"

    def test_quoted_numbers_pass_through(self):
        """Test embedded quotes are not cleaned at this stage"""
        record = RawRecord(director_popularity="\"0\"")
        assert record.director_popularity == "\"0\""

    def test_immutable(self):
        """Test raw records cannot be modified"""
        record = RawRecord(title="Avatar")
        with pytest.raises(ValidationError):
            record.title = "Titanic"


@pytest.mark.unit
class TestCleanRecord:
    """Tests for CleanRecord model"""

    def test_valid_clean_record(self):
        """Test creating a clean record"""
        record = CleanRecord(
            title="Avatar",
            duration=178,
            budget=237000000,
            rating=7.9,
            budget_category="Blockbuster Budget",
            gross_category="Unknown",
            duration_category="Epic Length",
            rating_category="Good",
        )
        assert record.gross is None
        assert record.duration == 178

    def test_category_fields_required(self):
        """Test category labels cannot be left out"""
        with pytest.raises(ValidationError):
            CleanRecord(title="Avatar", budget_category="Low Budget")

    def test_blank_category_rejected(self):
        """Test category labels cannot be blank"""
        with pytest.raises(ValidationError):
            CleanRecord(
                budget_category="",
                gross_category="Unknown",
                duration_category="Unknown",
                rating_category="Not Rated",
            )

    def test_passthrough_columns_kept(self):
        """Test extra columns are accepted"""
        record = CleanRecord(
            budget_category="Unknown",
            gross_category="Unknown",
            duration_category="Unknown",
            rating_category="Not Rated",
            voted_user_count="886204",
        )
        assert record.model_extra["voted_user_count"] == "886204"


@pytest.mark.unit
class TestCategoryBand:
    """Tests for CategoryBand and CategoryBandSet models"""

    def test_band_with_two_bounds_rejected(self):
        """Test a band may set only one bound"""
        with pytest.raises(ValidationError) as exc_info:
            CategoryBand(label="Mixed", below=10, up_to=20)

        assert "both" in str(exc_info.value)

    def test_band_contains(self):
        """Test strict and inclusive bounds"""
        assert CategoryBand(label="Low", below=10).contains(9.99)
        assert not CategoryBand(label="Low", below=10).contains(10)
        assert CategoryBand(label="Mid", up_to=10).contains(10)
        assert CategoryBand(label="Rest").contains(1e12)

    def test_last_band_must_be_unbounded(self):
        """Test a band set needs a catch-all band"""
        with pytest.raises(ValidationError):
            CategoryBandSet(
                field_name="budget",
                category_field="budget_category",
                bands=[{"label": "Low", "below": 10}],
            )

    def test_only_last_band_unbounded(self):
        """Test a catch-all band in the middle is rejected"""
        with pytest.raises(ValidationError):
            CategoryBandSet(
                field_name="budget",
                category_field="budget_category",
                bands=[{"label": "Any"}, {"label": "Low", "below": 10}, {"label": "Rest"}],
            )

    def test_decreasing_bounds_rejected(self):
        """Test bounds must not decrease"""
        with pytest.raises(ValidationError):
            CategoryBandSet(
                field_name="budget",
                category_field="budget_category",
                bands=[
                    {"label": "High", "up_to": 100},
                    {"label": "Low", "below": 10},
                    {"label": "Rest"},
                ],
            )

    def test_empty_bands_rejected(self):
        """Test at least one band is required"""
        with pytest.raises(ValidationError):
            CategoryBandSet(field_name="budget", category_field="budget_category", bands=[])

    def test_labels_include_absent_label(self):
        """Test labels lists every possible output"""
        band_set = CategoryBandSet(
            field_name="rating",
            category_field="rating_category",
            absent_label="Not Rated",
            bands=[{"label": "Poor", "below": 5.0}, {"label": "Fine"}],
        )
        assert band_set.labels == ["Poor", "Fine", "Not Rated"]


@pytest.mark.unit
class TestBackfillCorrection:
    """Tests for BackfillCorrection model"""

    def test_valid_correction(self):
        """Test creating a correction"""
        correction = BackfillCorrection(
            title="The Dark Knight Rises", field_name="duration", value=165
        )
        assert correction.value == 165

    def test_blank_title_rejected(self):
        """Test a correction needs a title to match"""
        with pytest.raises(ValidationError):
            BackfillCorrection(title="", field_name="duration", value=165)


@pytest.mark.unit
class TestPipelineConfig:
    """Tests for PipelineConfig model"""

    def test_defaults(self):
        """Test the default run settings"""
        config = PipelineConfig()
        assert config.raw_table == "movies_raw"
        assert config.clean_table == "movies_clean"
        assert config.view_name == "ready_for_analysis"
        assert config.store_mode == "temp"
        assert len(config.identity_fields) == 7
        assert config.coerced_fields["budget"] == "bigint"
        assert config.coerced_fields["rating"] == "double"
        assert config.quote_stripped_fields == list(config.coerced_fields)

    def test_quote_stripping_follows_coerced_fields(self):
        """Test custom numeric fields are quote-stripped unless overridden"""
        config = PipelineConfig(coerced_fields={"budget": "bigint", "gross": "bigint"})
        assert config.quote_stripped_fields == ["budget", "gross"]

        config = PipelineConfig(quote_stripped_fields=["budget"])
        assert config.quote_stripped_fields == ["budget"]

    def test_magnitude_field_must_be_coerced(self):
        """Test the magnitude rule must target a numeric field"""
        with pytest.raises(ValidationError) as exc_info:
            PipelineConfig(magnitude_correction=MagnitudeCorrection(field_name="title"))

        assert "coerced" in str(exc_info.value)

    def test_unknown_numeric_type_rejected(self):
        """Test coerced field types are restricted"""
        with pytest.raises(ValidationError):
            PipelineConfig(coerced_fields={"budget": "decimal"})

    def test_invalid_store_mode_rejected(self):
        """Test store mode is temp or managed"""
        with pytest.raises(ValidationError):
            PipelineConfig(store_mode="external")

    def test_non_positive_divisor_rejected(self):
        """Test the magnitude divisor must be positive"""
        with pytest.raises(ValidationError):
            MagnitudeCorrection(divisor=0)


@pytest.mark.unit
class TestReports:
    """Tests for ProfileReport and CleaningSummary models"""

    def test_backfilled_count(self):
        """Test backfilled_count sums every field"""
        summary = CleaningSummary(
            raw_table="movies_raw",
            clean_table="movies_clean",
            view_name="ready_for_analysis",
            original_count=5043,
            cleaned_count=4998,
            duplicates_removed=45,
            backfilled={"duration": 2, "gross": 1},
        )
        assert summary.backfilled_count == 3
        assert summary.still_missing_runtime == 0

    def test_negative_counts_rejected(self):
        """Test counts cannot be negative"""
        with pytest.raises(ValidationError):
            ProfileReport(table="movies_raw", record_count=-1)
