"""
Response schemas for the catalog routes.

``CatalogView`` is what the front-end polls to render the home page:
the generation status, the single user-facing error (if any) and the
book cards in display order.
"""

from typing import List, Optional

from pydantic import BaseModel

from ..models import CatalogRecord, CatalogStatus


class CatalogView(BaseModel):
    """The catalog as the home page renders it.

    ``items`` is empty while the generation is pending and after it
    failed; ``error`` is only set in the latter case.
    """

    status: CatalogStatus
    error: Optional[str] = None
    total: int
    items: List[CatalogRecord]


class DeleteResult(BaseModel):
    status: str
    removed: bool = False
