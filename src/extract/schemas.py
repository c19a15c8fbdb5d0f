"""
Extract Layer Schemas

Raw response schemas for data coming from the Keepa product API.
Only the fields the pipeline reads are declared; everything else is kept as extra.
"""

from __future__ import annotations

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict


class KeepaErrorPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    message: Optional[str] = None
    details: Optional[Any] = None


class KeepaProduct(BaseModel):
    model_config = ConfigDict(extra="allow")

    asin: Optional[str] = None
    domainId: Optional[int] = None
    title: Optional[str] = None
    imagesCSV: Optional[str] = None


class KeepaProductResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    timestamp: Optional[int] = None
    tokensLeft: Optional[int] = None
    refillIn: Optional[int] = None
    refillRate: Optional[int] = None
    error: Optional[KeepaErrorPayload] = None
    products: Optional[List[KeepaProduct]] = None

    def first_product(self) -> Optional[KeepaProduct]:
        if not self.products:
            return None
        return self.products[0]
