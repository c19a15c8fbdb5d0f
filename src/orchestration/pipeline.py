"""
Pipeline Orchestrator - ASIN column → Keepa → image rows

One synchronous run:
1. Read the identifiers from column B of the worksheet (empty cells skipped)
2. Fetch the image list of every identifier from Keepa, in sheet order
3. Write one row per identifier starting at C3
4. Optionally save a Parquet/JSON snapshot of what was written

Any fetch failure aborts the run before a single cell is written.
"""

from datetime import datetime
from typing import Optional
import logging

# Extract layer imports
from src.extract.data_fetcher import fetch_image_urls_batch
from src.extract.keepa_api import KeepaAPIClient

# Transform layer imports
from src.transformation.schemas import OUTPUT_START_COLUMN, OUTPUT_START_ROW
from src.transformation.transformers import (
    build_image_rows,
    image_rows_to_dataframe,
    to_full_image_urls,
)
from src.transformation.validators import validate_image_rows_schema

# Load layer imports
from src.load.local_storage import save_image_rows_snapshot
from src.load.sheet_writer import read_identifiers, write_image_rows
from src.load.worksheet import Worksheet

logger = logging.getLogger(__name__)


class ImageSheetPipeline:
    """Orchestrates the read → fetch → write run over one worksheet"""

    def __init__(
        self,
        worksheet: Worksheet,
        client: KeepaAPIClient,
        dry_run: bool = False,
        full_urls: bool = False,
        snapshot_dir: Optional[str] = None,
    ):
        """
        Initialize the pipeline

        Args:
            worksheet: Worksheet holding the ASIN column and receiving the images
            client: Keepa API client
            dry_run: If true, fetch but skip cell writes and snapshots
            full_urls: If true, prefix image names with the Amazon image host
            snapshot_dir: Directory for the run snapshot, None to skip it
        """
        self.worksheet = worksheet
        self.client = client
        self.dry_run = dry_run
        self.full_urls = full_urls
        self.snapshot_dir = snapshot_dir

        if self.dry_run:
            logger.info("🔍 DRY RUN MODE: worksheet will not be modified")

    def run(self) -> dict:
        """
        Run the batch once

        Returns:
            dict: Run statistics

        Raises:
            RemoteApiError, MissingDataError: On the first failed fetch
        """
        logger.info("🚀 Starting image sheet pipeline")
        started_at = datetime.now()

        try:
            # Step 1: Read identifiers
            logger.info("🔄 Step 1: Reading ASINs from worksheet...")
            asins = read_identifiers(self.worksheet)

            # Step 2: Fetch every image list before touching the sheet
            logger.info(f"🔄 Step 2: Fetching images for {len(asins)} ASINs...")
            image_lists = fetch_image_urls_batch(asins, self.client)
            if self.full_urls:
                image_lists = [to_full_image_urls(images) for images in image_lists]

            # Place rows
            rows = build_image_rows(
                asins, image_lists, OUTPUT_START_ROW, OUTPUT_START_COLUMN
            )
            rows_df = image_rows_to_dataframe(rows)
            validate_image_rows_schema(rows_df)

            stats = {
                "asins": len(asins),
                "rows_written": 0,
                "images_written": 0,
                "dry_run": self.dry_run,
                "snapshot": None,
            }

            if self.dry_run:
                for row in rows:
                    logger.info(f"🔍 DRY RUN: row {row.row} {row.asin} -> {row.image_urls}")
                logger.info("🔍 DRY RUN: Skipping worksheet writes")
                return stats

            # Step 3: Write rows
            logger.info(f"🔄 Step 3: Writing {len(rows)} rows...")
            stats["images_written"] = write_image_rows(self.worksheet, rows)
            stats["rows_written"] = len(rows)

            # Step 4: Snapshot
            if self.snapshot_dir:
                logger.info("💾 Step 4: Saving snapshot...")
                stats["snapshot"] = save_image_rows_snapshot(
                    rows_df, self.snapshot_dir
                )

            elapsed = (datetime.now() - started_at).total_seconds()
            logger.info(
                f"✅ Pipeline completed: {stats['rows_written']} rows in {elapsed:.2f}s"
            )
            return stats

        except Exception as e:
            logger.error(f"❌ Image sheet pipeline failed: {e}")
            raise
