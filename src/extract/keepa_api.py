"""
Keepa API Client - Pure I/O Operations

This module handles all external calls to the Keepa product endpoint with no business logic.
Returns raw JSON payloads that the fetcher validates and the transform layer processes.
"""

import time
from typing import Any, Dict, Optional, Tuple
import logging

import requests

from src.coreutils.env import KEEPA_DEFAULT_DOMAIN
from src.coreutils.request import new_session, get_json_unchecked

logger = logging.getLogger(__name__)

# API Endpoints
PRODUCT_ENDPOINT = "https://api.keepa.com/product"


class KeepaAPIClient:
    """Pure API client for the Keepa product endpoint"""

    def __init__(
        self,
        api_key: str,
        domain: int = KEEPA_DEFAULT_DOMAIN,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("Keepa API key is required")

        self.api_key = api_key
        self.domain = domain
        self.timeout = timeout
        self.session = session or new_session()

    def get_product(self, asin: str) -> Tuple[int, Dict[str, Any]]:
        """
        Fetch the raw product payload for a single ASIN

        The HTTP status is not raised; Keepa reports failures inside the body.

        Args:
            asin: Amazon ASIN

        Returns:
            Tuple[int, Dict]: HTTP status code and raw JSON payload
        """
        params = {"key": self.api_key, "domain": self.domain, "asin": asin}

        logger.info(f"Fetching product {asin} from {PRODUCT_ENDPOINT}")
        start_time = time.time()

        try:
            status_code, data = get_json_unchecked(
                self.session, PRODUCT_ENDPOINT, params=params, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            # transport errors echo the full URL, key included
            message = str(e).replace(self.api_key, "***")
            logger.error(f"Error fetching product {asin}: {message}")
            raise type(e)(message) from None

        elapsed = time.time() - start_time
        logger.info(
            f"Fetched product {asin} (HTTP {status_code}): {elapsed:.2f} seconds"
        )
        return status_code, data

    def close(self) -> None:
        self.session.close()
