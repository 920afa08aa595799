"""Logging setup and JSON-lines event log for receipt processing."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_EVENT_LOG_FILE = Path(__file__).resolve().parents[2] / "artifacts" / "logs" / "receipts.log"
SENSITIVE_KEYS = {"raw_payload", "payload", "receipt", "items"}

_event_log_file: Optional[Path] = DEFAULT_EVENT_LOG_FILE
_event_log_lock = Lock()


def configure_logging(level: str = "INFO") -> None:
	"""Attach a single stream handler to the root logger."""

	root = logging.getLogger()
	root.setLevel(level.upper())
	for handler in list(root.handlers):
		if getattr(handler, "_receipts_handler", False):
			root.removeHandler(handler)

	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
	handler._receipts_handler = True  # type: ignore[attr-defined]
	root.addHandler(handler)


def set_event_log_file(path: Optional[Union[str, Path]]) -> None:
	"""Redirect the event log; ``None`` disables it."""

	global _event_log_file
	_event_log_file = Path(path) if path is not None else None


def get_event_log_file() -> Optional[Path]:
	return _event_log_file


def log_receipt_event(event: Dict[str, Any]) -> None:
	"""Persist a structured receipt event without leaking receipt contents."""

	target = _event_log_file
	if target is None:
		return

	payload = {
		"timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
	}
	for key, value in event.items():
		if key is None:
			continue
		normalized = str(key)
		if normalized.lower() in SENSITIVE_KEYS:
			continue
		payload[normalized] = value

	try:
		with _event_log_lock:
			target.parent.mkdir(parents=True, exist_ok=True)
			with target.open("a", encoding="utf-8") as handle:
				json.dump(payload, handle, ensure_ascii=False, default=str)
				handle.write("\n")
	except Exception as exc:  # pragma: no cover - logging must never break a request
		logger.debug("Failed to write receipt event log: %s", exc, exc_info=True)
