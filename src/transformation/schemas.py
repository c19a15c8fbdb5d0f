"""
Transformation Layer Schemas

Schemas for the rows written to the spreadsheet.
Sheet placement is fixed: identifiers are read from column B, results start at C3.
"""

import polars as pl

INPUT_COLUMN = 2  # column B
OUTPUT_START_ROW = 3
OUTPUT_START_COLUMN = 3

AMAZON_IMAGE_BASE_URL = "https://images-na.ssl-images-amazon.com/images/I/"

IMAGE_ROWS_SCHEMA = pl.Schema(
    [
        ("asin", pl.String()),
        ("row", pl.Int64()),
        ("column", pl.Int64()),
        ("image_count", pl.Int64()),
        ("image_urls", pl.List(pl.String())),
    ]
)
