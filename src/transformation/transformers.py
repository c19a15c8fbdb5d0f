"""
Data Transformers - Transform Layer

Pure functions turning a column of cell values and fetched image lists
into the rows written back to the spreadsheet.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List
import logging

import polars as pl

from .schemas import (
    AMAZON_IMAGE_BASE_URL,
    IMAGE_ROWS_SCHEMA,
    OUTPUT_START_COLUMN,
    OUTPUT_START_ROW,
)

logger = logging.getLogger(__name__)


@dataclass
class ImageRow:
    """One output row: an ASIN and its images spread from `column` onwards"""

    asin: str
    row: int
    column: int = OUTPUT_START_COLUMN
    image_urls: List[str] = field(default_factory=list)


def filter_identifiers(values: Iterable[Any]) -> List[str]:
    """
    Keep the non-empty cells of an input column, top to bottom

    Empty means no value or the empty string; anything else is kept
    as-is (converted to str), whitespace included.

    Args:
        values: Raw cell values of the input column

    Returns:
        List[str]: Identifiers in sheet order
    """
    identifiers = [str(v) for v in values if v is not None and v != ""]
    logger.info(f"Found {len(identifiers)} identifiers")
    return identifiers


def to_full_image_url(image_name: str) -> str:
    return f"{AMAZON_IMAGE_BASE_URL}{image_name}"


def to_full_image_urls(image_names: List[str]) -> List[str]:
    return [to_full_image_url(name) for name in image_names]


def build_image_rows(
    asins: List[str],
    image_lists: List[List[str]],
    start_row: int = OUTPUT_START_ROW,
    column: int = OUTPUT_START_COLUMN,
) -> List[ImageRow]:
    """
    Place each ASIN's images on consecutive sheet rows

    Args:
        asins: Identifiers in processing order
        image_lists: Image list per identifier, same order
        start_row: Sheet row of the first identifier (1-based)
        column: First column of every row (1-based)

    Returns:
        List[ImageRow]: One row per identifier
    """
    if len(asins) != len(image_lists):
        raise ValueError(
            f"Got {len(asins)} ASINs but {len(image_lists)} image lists"
        )

    return [
        ImageRow(asin=asin, row=start_row + offset, column=column, image_urls=images)
        for offset, (asin, images) in enumerate(zip(asins, image_lists))
    ]


def image_rows_to_dataframe(rows: List[ImageRow]) -> pl.DataFrame:
    """Convert image rows to a DataFrame with IMAGE_ROWS_SCHEMA"""
    return pl.DataFrame(
        {
            "asin": [r.asin for r in rows],
            "row": [r.row for r in rows],
            "column": [r.column for r in rows],
            "image_count": [len(r.image_urls) for r in rows],
            "image_urls": [r.image_urls for r in rows],
        },
        schema=IMAGE_ROWS_SCHEMA,
    )
