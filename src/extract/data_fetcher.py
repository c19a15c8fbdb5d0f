"""
Data Fetcher - Extract Layer

Functions for fetching product image lists from the Keepa API.
Validates the raw payload against the response schema before any field is read.
"""

import json
from typing import Any, List, Optional
import logging

from pydantic import ValidationError

from src.coreutils.request import InvalidJSONResponse

from .errors import MissingDataError, RemoteApiError
from .keepa_api import KeepaAPIClient
from .schemas import KeepaProductResponse

logger = logging.getLogger(__name__)


def parse_product_response(
    payload: Any, status_code: Optional[int] = None
) -> KeepaProductResponse:
    """
    Validate a raw Keepa payload and surface API errors

    Args:
        payload: Decoded JSON body
        status_code: HTTP status the body came with

    Returns:
        KeepaProductResponse: Validated response

    Raises:
        RemoteApiError: If the payload carries an error field or has the wrong shape
    """
    try:
        response = KeepaProductResponse.model_validate(payload)
    except ValidationError as e:
        raise RemoteApiError(
            f"Unexpected response from Keepa (HTTP {status_code}): {e}",
            status_code=status_code,
        ) from e

    if response.error is not None:
        message = response.error.message
        if message is None:
            message = json.dumps(response.error.model_dump(exclude_none=True))
        raise RemoteApiError(message, status_code=status_code)

    return response


def extract_images_csv(response: KeepaProductResponse, asin: str) -> str:
    """Return the non-empty imagesCSV of the first product or raise MissingDataError"""
    product = response.first_product()
    if product is None or not product.imagesCSV:
        raise MissingDataError(asin)
    return product.imagesCSV


def fetch_image_urls(asin: str, client: KeepaAPIClient) -> List[str]:
    """
    Fetch the image list for one ASIN

    Args:
        asin: Amazon ASIN (non-empty)
        client: Keepa API client holding the credential and domain

    Returns:
        List[str]: imagesCSV split on commas, in API order

    Raises:
        ValueError: If asin is not a string or is empty
        RemoteApiError: If Keepa returned an error or an undecodable body
        MissingDataError: If the first product has no imagesCSV
    """
    if not isinstance(asin, str) or not asin:
        raise ValueError(f"ASIN must be a non-empty string, got {asin!r}")

    try:
        status_code, payload = client.get_product(asin)
    except InvalidJSONResponse as e:
        raise RemoteApiError(str(e), status_code=e.status_code) from e

    response = parse_product_response(payload, status_code)
    images_csv = extract_images_csv(response, asin)

    image_urls = images_csv.split(",")
    logger.info(f"ASIN {asin}: {len(image_urls)} images")
    return image_urls


def fetch_image_urls_batch(
    asins: List[str], client: KeepaAPIClient
) -> List[List[str]]:
    """
    Fetch image lists for several ASINs in order

    Stops at the first failure; the exception propagates to the caller.
    Duplicate ASINs are fetched again so the result stays aligned with the input.

    Returns:
        List[List[str]]: One image list per input ASIN
    """
    results = []

    for i, asin in enumerate(asins, 1):
        logger.info(f"Fetching images for ASIN {i}/{len(asins)}: {asin}")
        results.append(fetch_image_urls(asin, client))

    return results
