"""
Local Storage - Load Layer

Pure functions for local file storage operations.
Keeps a Parquet/JSON snapshot of the rows written in each run.
"""

import polars as pl
import json
import os
from datetime import datetime
from typing import Dict
import logging

logger = logging.getLogger(__name__)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    data = df.to_dicts()

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved {len(data)} records to {filepath}")
    return filepath


def save_image_rows_snapshot(
    df: pl.DataFrame, output_dir: str = "output"
) -> Dict[str, str]:
    """
    Save the rows written in this run

    Args:
        df: Image rows DataFrame
        output_dir: Output directory

    Returns:
        Dict: Paths to saved files
    """
    stamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")

    parquet_path = os.path.join(output_dir, f"image_rows_{stamp}.parquet")
    json_path = os.path.join(output_dir, f"image_rows_{stamp}.json")

    return {"parquet": save_parquet(df, parquet_path), "json": save_json(df, json_path)}
