"""In-memory receipt store.

Owns two maps keyed by receipt id: the receipts themselves and the points
computed for them. Both maps are guarded by one lock. The lock is re-entrant
and exposed as ``lock`` so the service layer can hold it across a whole
cache-check, lookup, compute and cache sequence.

State per id only moves forward: absent -> stored -> stored and scored.
Nothing is persisted; a restart starts empty.
"""

from __future__ import annotations

import uuid
from threading import RLock
from typing import Dict, Optional

from app.models.schema import Receipt
from app.utils.helpers.exceptions import ReceiptNotFoundError


class ReceiptRepository:
    """Thread-safe in-memory storage for receipts and their cached points."""

    def __init__(self):
        self.receipts: Dict[str, Receipt] = {}
        self.points_cache: Dict[str, int] = {}
        self.lock = RLock()

    def create_receipt(self, receipt: Receipt) -> str:
        """Store a receipt under a fresh UUID4 and return the id."""
        receipt_id = str(uuid.uuid4())
        with self.lock:
            self.receipts[receipt_id] = receipt
        return receipt_id

    def get_receipt(self, receipt_id: str) -> Optional[Receipt]:
        with self.lock:
            return self.receipts.get(receipt_id)

    def has_receipt(self, receipt_id: str) -> bool:
        with self.lock:
            return receipt_id in self.receipts

    def get_cached_points(self, receipt_id: str) -> Optional[int]:
        with self.lock:
            return self.points_cache.get(receipt_id)

    def put_cached_points(self, receipt_id: str, points: int) -> None:
        """Cache points for a stored receipt. Overwriting an entry is allowed."""
        with self.lock:
            if receipt_id not in self.receipts:
                raise ReceiptNotFoundError(receipt_id)
            self.points_cache[receipt_id] = points

    def count_receipts(self) -> int:
        with self.lock:
            return len(self.receipts)

    def count_cached(self) -> int:
        with self.lock:
            return len(self.points_cache)
