"""
Extract Layer Errors

Failures raised while fetching product images from Keepa.
Both are fatal to a batch run.
"""

from typing import Optional

MISSING_IMAGES_MESSAGE = "Image information could not be retrieved"


class KeepaError(Exception):
    """Base class for Keepa fetch failures"""


class RemoteApiError(KeepaError):
    """Keepa answered with a structured error (or a body that is not JSON)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingDataError(KeepaError):
    """The product response has no usable imagesCSV field"""

    def __init__(self, asin: Optional[str] = None):
        super().__init__(MISSING_IMAGES_MESSAGE)
        self.asin = asin
