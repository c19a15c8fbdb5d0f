"""
Main Entry Point - Keepa Image Sheet

Fetches Amazon product image lists from Keepa and writes them into a spreadsheet.

    python -m src.main fetch B01N5IB20Q
    python -m src.main run --xlsx asins.xlsx
    python -m src.main run --sheet-id <spreadsheet key> --worksheet Sheet1
"""

import sys
import os
import logging
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.coreutils.env import Settings, load_settings
from src.coreutils.logging import setup_logging
from src.extract.data_fetcher import fetch_image_urls
from src.extract.keepa_api import KeepaAPIClient
from src.load.worksheet import ExcelWorksheet, GoogleSheetWorksheet, Worksheet
from src.orchestration.pipeline import ImageSheetPipeline
from src.transformation.transformers import to_full_image_urls

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> KeepaAPIClient:
    return KeepaAPIClient(
        api_key=settings.require_api_key(),
        domain=settings.keepa_domain,
        timeout=settings.keepa_timeout,
    )


def open_worksheet(settings: Settings, xlsx: Optional[str] = None) -> Worksheet:
    """Open the local workbook when given, otherwise the configured Google Sheet"""
    if xlsx:
        return ExcelWorksheet(xlsx, settings.worksheet)

    if not settings.sheet_id:
        raise ValueError("Either --xlsx or --sheet-id (KEEPA_SHEET_ID) is required")

    return GoogleSheetWorksheet.open(
        settings.sheet_id, settings.credentials_file, settings.worksheet
    )


def run_fetch(settings: Settings, asin: str, full_urls: bool = False) -> List[str]:
    """Fetch and return the image list of a single ASIN"""
    client = create_client(settings)
    try:
        images = fetch_image_urls(asin, client)
    finally:
        client.close()
    return to_full_image_urls(images) if full_urls else images


def run_batch(
    settings: Settings,
    xlsx: Optional[str] = None,
    dry_run: bool = False,
    full_urls: bool = False,
    snapshot: bool = True,
) -> dict:
    """Run the sheet batch writer once"""
    logger.info(f"🚀 Running image sheet batch (dry_run={dry_run})")

    client = create_client(settings)
    try:
        worksheet = open_worksheet(settings, xlsx)
        pipeline = ImageSheetPipeline(
            worksheet,
            client,
            dry_run=dry_run,
            full_urls=full_urls,
            snapshot_dir=settings.output_dir if snapshot else None,
        )
        return pipeline.run()
    finally:
        client.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Keepa Image Sheet")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument("--domain", type=int, help="Keepa domain code (default 5)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser("fetch", help="Print the images of one ASIN")
    fetch_parser.add_argument("asin", help="Amazon ASIN")
    fetch_parser.add_argument(
        "--full-urls", action="store_true", help="Prefix the Amazon image host"
    )

    run_parser = subparsers.add_parser("run", help="Fill the worksheet from column B")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--sheet-id", help="Google spreadsheet key")
    source.add_argument("--xlsx", help="Local Excel workbook")
    run_parser.add_argument("--worksheet", help="Worksheet name (default: first/active)")
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch only, do not write to the worksheet",
    )
    run_parser.add_argument(
        "--full-urls", action="store_true", help="Prefix the Amazon image host"
    )
    run_parser.add_argument("--snapshot-dir", help="Snapshot output directory")
    run_parser.add_argument(
        "--no-snapshot", action="store_true", help="Do not save a local snapshot"
    )

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    settings = load_settings()
    if args.domain is not None:
        settings.keepa_domain = args.domain

    try:
        if args.command == "fetch":
            for url in run_fetch(settings, args.asin, args.full_urls):
                print(url)
            return 0

        if args.sheet_id:
            settings.sheet_id = args.sheet_id
        if args.worksheet:
            settings.worksheet = args.worksheet
        if args.snapshot_dir:
            settings.output_dir = args.snapshot_dir

        results = run_batch(
            settings,
            xlsx=args.xlsx,
            dry_run=args.dry_run,
            full_urls=args.full_urls,
            snapshot=not args.no_snapshot,
        )
        print(f"✅ Pipeline completed: {results}")
        return 0

    except Exception as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
