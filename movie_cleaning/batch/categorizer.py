"""
Categorization stage: numeric fields to fixed-vocabulary labels.

The band definitions live in configuration. The same CategoryBandSet drives
both the pure-Python label_for() and the Spark column built here, so the
two can be checked against each other.
"""

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F

from movie_cleaning.core.models import CategoryBandSet
from movie_cleaning.observability.logger import get_logger

from .expressions import quoted

logger = get_logger(__name__)


class Categorizer:
    """
    Attaches one category column per configured band set.

    Stateless: categorize() only reads the numeric columns, so running it
    twice over the same rows yields the same labels.
    """

    def __init__(self, band_sets: list[CategoryBandSet]):
        """
        Initialize categorizer.

        Args:
            band_sets: One band set per numeric field

        Raises:
            ValueError: If two band sets write the same category column
        """
        category_fields = [band_set.category_field for band_set in band_sets]
        duplicated = {name for name in category_fields if category_fields.count(name) > 1}
        if duplicated:
            raise ValueError(f"Category columns configured more than once: {sorted(duplicated)}")

        self.band_sets = band_sets

    @staticmethod
    def category_column(band_set: CategoryBandSet) -> Column:
        """
        Compile a band set into a Spark CASE expression.

        Args:
            band_set: Bands for one numeric field

        Returns:
            Column yielding the label; never null
        """
        value = F.col(quoted(band_set.field_name))
        absent = value.isNull() | F.isnan(value.cast("double"))

        expression = F.when(absent, F.lit(band_set.absent_label))
        for band in band_set.bands:
            if band.below is not None:
                expression = expression.when(value < F.lit(band.below), F.lit(band.label))
            elif band.up_to is not None:
                expression = expression.when(value <= F.lit(band.up_to), F.lit(band.label))

        return expression.otherwise(F.lit(band_set.bands[-1].label))

    def categorize(self, df: DataFrame) -> DataFrame:
        """
        Attach (or recompute) every category column.

        Args:
            df: Normalized movie rows

        Returns:
            DataFrame with the category columns set
        """
        missing = [bs.field_name for bs in self.band_sets if bs.field_name not in df.columns]
        if missing:
            raise ValueError(f"Cannot categorize, numeric columns not found: {missing}")

        logger.debug(f"Categorizing {len(self.band_sets)} fields")
        return df.withColumns({
            band_set.category_field: self.category_column(band_set)
            for band_set in self.band_sets
        })
