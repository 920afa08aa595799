"""Pytest configuration and shared fixtures for receipt points tests.

- Every test gets its own receipt store and app instance
- The JSON event log is redirected into the test's tmp_path
- Sample receipts with known point totals
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.main import create_app
from app.models.schema import Receipt
from app.repositories.receipt_repository import ReceiptRepository
from app.services.config_service import ConfigService
from app.services.receipt_service import ReceiptService
from app.utils.logging_utils import set_event_log_file


@pytest.fixture(autouse=True)
def event_log_path(tmp_path: Path, monkeypatch) -> Path:
    """Keep event log writes inside the test's temporary directory."""
    path = tmp_path / "logs" / "receipts.log"
    monkeypatch.setenv("RECEIPTS_EVENT_LOG_PATH", str(path))
    monkeypatch.delenv("RECEIPTS_EVENT_LOG", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    set_event_log_file(path)
    yield path
    set_event_log_file(None)


@pytest.fixture
def sample_receipt_data() -> Dict[str, Any]:
    """Target receipt worth 17 points."""
    return {
        "retailer": "Target",
        "purchaseDate": "2022-04-11",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Gatorade", "price": "22.90"},
            {"shortDescription": "Food", "price": "10.00"},
        ],
        "total": "32.90",
        "pointsEarned": 89,
    }


@pytest.fixture
def all_rules_receipt_data(sample_receipt_data) -> Dict[str, Any]:
    """Receipt that triggers every scoring rule, worth 109 points."""
    data = json.loads(json.dumps(sample_receipt_data))
    data["purchaseDate"] = "2022-01-01"
    data["purchaseTime"] = "15:00"
    data["items"][0]["shortDescription"] = "abc"
    data["items"][1]["shortDescription"] = "abcdef"
    data["total"] = "1.00"
    return data


@pytest.fixture
def sample_receipt(sample_receipt_data) -> Receipt:
    return Receipt.model_validate(sample_receipt_data)


@pytest.fixture
def receipt_repository() -> ReceiptRepository:
    return ReceiptRepository()


@pytest.fixture
def receipt_service(receipt_repository: ReceiptRepository) -> ReceiptService:
    return ReceiptService(repository=receipt_repository)


@pytest.fixture
def app_config(tmp_path: Path) -> ConfigService:
    return ConfigService(config_path=tmp_path / "service.json", load_env=False)


@pytest.fixture
def app(app_config: ConfigService):
    return create_app(config=app_config)


@pytest.fixture
def api_client(app):
    """FastAPI test client bound to a fresh receipt store."""
    with TestClient(app) as client:
        yield client
