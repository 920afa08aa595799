import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.repositories.receipt_repository import ReceiptRepository
from app.utils.helpers.exceptions import ReceiptNotFoundError


def test_new_repository_is_empty():
    repo = ReceiptRepository()
    assert repo.count_receipts() == 0
    assert repo.count_cached() == 0


def test_create_and_get_receipt(sample_receipt):
    repo = ReceiptRepository()
    receipt_id = repo.create_receipt(sample_receipt)

    assert uuid.UUID(receipt_id).version == 4
    assert repo.get_receipt(receipt_id) == sample_receipt
    assert repo.has_receipt(receipt_id)
    assert repo.count_receipts() == 1


def test_unknown_ids_return_none(sample_receipt):
    repo = ReceiptRepository()
    repo.create_receipt(sample_receipt)

    assert repo.get_receipt("abc") is None
    assert repo.get_cached_points("abc") is None
    assert not repo.has_receipt("abc")


def test_ids_are_unique(sample_receipt):
    repo = ReceiptRepository()
    ids = {repo.create_receipt(sample_receipt) for _ in range(500)}
    assert len(ids) == 500
    assert repo.count_receipts() == 500


def test_cache_points_for_stored_receipt(sample_receipt):
    repo = ReceiptRepository()
    receipt_id = repo.create_receipt(sample_receipt)

    assert repo.get_cached_points(receipt_id) is None
    repo.put_cached_points(receipt_id, 17)
    assert repo.get_cached_points(receipt_id) == 17

    repo.put_cached_points(receipt_id, 17)
    assert repo.count_cached() == 1


def test_cannot_score_unknown_receipt():
    repo = ReceiptRepository()
    with pytest.raises(ReceiptNotFoundError):
        repo.put_cached_points("abc", 10)
    assert repo.count_cached() == 0


def test_concurrent_creates_are_all_stored(sample_receipt):
    repo = ReceiptRepository()
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: repo.create_receipt(sample_receipt), range(200)))

    assert len(set(ids)) == 200
    assert repo.count_receipts() == 200
