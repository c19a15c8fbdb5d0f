"""
Sheet Writer - Load Layer

Reads identifiers from and writes image rows to a worksheet.
No business logic: placement is decided by the transform layer.
"""

from typing import List
import logging

from src.transformation.schemas import INPUT_COLUMN
from src.transformation.transformers import ImageRow, filter_identifiers
from .worksheet import Worksheet

logger = logging.getLogger(__name__)


def read_identifiers(worksheet: Worksheet, column: int = INPUT_COLUMN) -> List[str]:
    """Read the non-empty cells of the input column, top to bottom"""
    values = worksheet.get_column_values(column)
    logger.info(f"Read {len(values)} cells from column {column}")
    return filter_identifiers(values)


def write_image_rows(worksheet: Worksheet, rows: List[ImageRow]) -> int:
    """
    Write each row's images into consecutive cells

    Existing cells are overwritten; cells beyond a row's last image are left untouched.

    Args:
        worksheet: Target worksheet
        rows: Rows built by build_image_rows

    Returns:
        int: Number of image cells written
    """
    cells_written = 0

    for image_row in rows:
        worksheet.write_row(image_row.row, image_row.column, image_row.image_urls)
        cells_written += len(image_row.image_urls)
        logger.debug(
            f"Wrote {len(image_row.image_urls)} images for {image_row.asin} "
            f"at row {image_row.row}"
        )

    worksheet.save()
    logger.info(f"Wrote {len(rows)} rows ({cells_written} cells)")
    return cells_written
