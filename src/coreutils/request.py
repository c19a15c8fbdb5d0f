import time
import logging
import requests
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class InvalidJSONResponse(ValueError):
    """Response body could not be decoded as JSON"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def new_session() -> requests.Session:
    """Create a new requests session (no retry adapter, single attempt per call)"""
    session = requests.Session()

    # Set default headers
    session.headers.update(
        {"User-Agent": "keepa-image-sheet/1.0", "Accept": "application/json"}
    )

    return session


def get_json_unchecked(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: Optional[float] = None,
) -> Tuple[int, Any]:
    """GET a URL and parse the body as JSON without raising on HTTP status.

    The status code is returned alongside the payload so the caller can
    inspect error bodies (non-2xx responses still carry JSON).

    Args:
        session: HTTP session to use
        url: URL to fetch
        params: Optional query parameters
        timeout: Request timeout in seconds, None to wait indefinitely

    Returns:
        (status_code, parsed JSON)

    Raises:
        requests.RequestException: On transport errors
        InvalidJSONResponse: On a body that is not valid JSON
    """
    start = time.time()
    response = session.get(url, params=params, timeout=timeout)
    logger.debug(
        f"Fetched from {url}: HTTP {response.status_code} "
        f"in {time.time() - start:.2f} seconds"
    )

    try:
        return response.status_code, response.json()
    except ValueError as e:
        raise InvalidJSONResponse(
            f"Invalid JSON response from {url} (HTTP {response.status_code}): {e}",
            status_code=response.status_code,
        ) from e
