"""
Data Validators - Transform Layer

Checks run on the image rows before they are written or saved.
"""

import polars as pl
from .schemas import IMAGE_ROWS_SCHEMA
import logging

logger = logging.getLogger(__name__)


def validate_image_rows_schema(df: pl.DataFrame) -> bool:
    """
    Validate image rows data matches expected schema

    Args:
        df: Image rows DataFrame

    Returns:
        bool: True if valid, raises exception if invalid
    """
    if df.schema != IMAGE_ROWS_SCHEMA:
        raise ValueError(
            f"Schema mismatch: expected {IMAGE_ROWS_SCHEMA}, got {df.schema}"
        )

    # Check for null values in required fields
    required_fields = ["asin", "row", "column"]
    for field in required_fields:
        null_count = df.select(pl.col(field).is_null().sum()).item()
        if null_count > 0:
            raise ValueError(
                f"Null values found in required field '{field}': {null_count}"
            )

    # Each ASIN owns exactly one sheet row
    duplicate_rows = df.height - df.select("row").n_unique()
    if duplicate_rows > 0:
        raise ValueError(f"Duplicate sheet rows found: {duplicate_rows}")

    logger.info(f"Image rows validation passed: {df.height} records")
    return True
