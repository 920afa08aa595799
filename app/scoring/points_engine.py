"""
Receipt Points Engine

Scores a validated receipt with six additive rules:
- one point per alphanumeric character in the retailer name
- 50 points for a round-dollar total, 25 for a multiple of 0.25
- 5 points per pair of items
- description-length bonus priced at 20% of the item, rounded up
- 6 points when the purchase day is odd
- 10 points for purchases strictly between 14:00 and 16:00

The odd-date rule reads the day of the month (2022-04-11 is odd), not the month.

A field that passed validation but cannot be parsed for a rule (for example a
calendar-invalid date like 2022-02-30) contributes zero points to that rule.
Totals above MAX_TOTAL_CENTS and prices too large for a float count as
unparseable.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from app.models.schema import Receipt

logger = logging.getLogger(__name__)

POINTS_PER_RETAILER_CHARACTER = 1
POINTS_ROUND_DOLLAR_TOTAL = 50
POINTS_QUARTER_MULTIPLE_TOTAL = 25
POINTS_PER_ITEM_PAIR = 5
ITEM_DESCRIPTION_LENGTH_FACTOR = 3
ITEM_PRICE_MULTIPLIER = 0.2
POINTS_ODD_PURCHASE_DAY = 6
POINTS_AFTERNOON_PURCHASE = 10

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
AFTERNOON_WINDOW_START = 14 * 60
AFTERNOON_WINDOW_END = 16 * 60

# totals are read as signed 32-bit cents; anything larger is unparseable
MAX_TOTAL_CENTS = 2**31 - 1


@dataclass(frozen=True)
class RuleResult:
    """Points awarded by a single scoring rule."""

    rule: str
    points: int
    detail: str = ""


def _money_digits(amount: str) -> Optional[str]:
    digits = amount.replace(".", "")
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return digits


def _to_cents(amount: str) -> Optional[int]:
    """Read a money string as integer cents by dropping the decimal point.

    Returns None when the amount is not numeric or exceeds MAX_TOTAL_CENTS.
    """
    digits = _money_digits(amount)
    if digits is None:
        return None
    try:
        cents = int(digits)
    except ValueError:
        # beyond the interpreter's int string-conversion limit
        return None
    if cents > MAX_TOTAL_CENTS:
        return None
    return cents


def _price_cents(amount: str) -> Optional[float]:
    """Read a money string as float cents; None when not numeric or not finite."""
    digits = _money_digits(amount)
    if digits is None:
        return None
    cents = float(digits)
    if not math.isfinite(cents):
        return None
    return cents


def _minutes_since_midnight(value: str) -> Optional[int]:
    try:
        parsed = datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return None
    return parsed.hour * 60 + parsed.minute


class PointsEngine:
    """Rule-based points calculator. Stateless; safe to share across threads."""

    def __init__(self):
        self.rules: List[Callable[[Receipt], RuleResult]] = [
            self._score_retailer,
            self._score_total,
            self._score_item_pairs,
            self._score_item_descriptions,
            self._score_purchase_date,
            self._score_purchase_time,
        ]

    def evaluate(self, receipt: Receipt) -> List[RuleResult]:
        return [rule(receipt) for rule in self.rules]

    def score(self, receipt: Receipt) -> int:
        results = self.evaluate(receipt)
        total = sum(result.points for result in results)
        logger.debug(
            "Scored receipt for %s: %d points (%s)",
            receipt.retailer,
            total,
            ", ".join(f"{r.rule}={r.points}" for r in results),
        )
        return total

    def _score_retailer(self, receipt: Receipt) -> RuleResult:
        count = sum(1 for ch in receipt.retailer if ch.isascii() and ch.isalnum())
        return RuleResult("retailer", count * POINTS_PER_RETAILER_CHARACTER, f"{count} alphanumeric")

    def _score_total(self, receipt: Receipt) -> RuleResult:
        cents = _to_cents(receipt.total)
        if cents is None:
            return RuleResult("total", 0, "unparseable total")

        points = 0
        if cents % 100 == 0:
            points += POINTS_ROUND_DOLLAR_TOTAL
        if cents % 25 == 0:
            points += POINTS_QUARTER_MULTIPLE_TOTAL
        return RuleResult("total", points, f"{cents} cents")

    def _score_item_pairs(self, receipt: Receipt) -> RuleResult:
        pairs = len(receipt.items) // 2
        return RuleResult("item_pairs", pairs * POINTS_PER_ITEM_PAIR, f"{pairs} pairs")

    def _score_item_descriptions(self, receipt: Receipt) -> RuleResult:
        points = 0
        for item in receipt.items:
            if len(item.shortDescription.strip()) % ITEM_DESCRIPTION_LENGTH_FACTOR != 0:
                continue
            cents = _price_cents(item.price)
            if cents is None:
                continue
            # keep float64 arithmetic; rounding error is part of the result
            points += math.ceil(cents * ITEM_PRICE_MULTIPLIER / 100.0)
        return RuleResult("item_descriptions", points)

    def _score_purchase_date(self, receipt: Receipt) -> RuleResult:
        try:
            purchased = datetime.strptime(receipt.purchaseDate, DATE_FORMAT)
        except ValueError:
            return RuleResult("purchase_date", 0, "unparseable date")
        if purchased.day % 2 == 1:
            return RuleResult("purchase_date", POINTS_ODD_PURCHASE_DAY, "odd day")
        return RuleResult("purchase_date", 0, "even day")

    def _score_purchase_time(self, receipt: Receipt) -> RuleResult:
        minutes = _minutes_since_midnight(receipt.purchaseTime)
        if minutes is None:
            return RuleResult("purchase_time", 0, "unparseable time")
        if AFTERNOON_WINDOW_START < minutes < AFTERNOON_WINDOW_END:
            return RuleResult("purchase_time", POINTS_AFTERNOON_PURCHASE, "afternoon window")
        return RuleResult("purchase_time", 0)


_default_engine = PointsEngine()


def calculate_points(receipt: Receipt) -> int:
    """Score a receipt with the shared default engine."""
    return _default_engine.score(receipt)
