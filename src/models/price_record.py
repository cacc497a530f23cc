# src/models/price_record.py

"""Price data models for one EMMSA trading day."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class PriceRecord:
    """One row of the EMMSA daily price table."""

    date: str
    product: str
    variety: str
    min_price: Decimal
    max_price: Decimal
    avg_price: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-ready dict (prices as numbers)."""
        return {
            "date": self.date,
            "product": self.product,
            "variety": self.variety,
            "min_price": float(self.min_price),
            "max_price": float(self.max_price),
            "avg_price": float(self.avg_price),
        }


@dataclass
class PriceBatch:
    """All records fetched for a date, stamped with the fetch time.

    This is the document written to stdout/file and stored in Pantry.
    """

    date: str
    prices: list[PriceRecord] = field(
        default_factory=lambda: list[PriceRecord]()
    )
    fetched_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "prices": [p.to_dict() for p in self.prices],
            "fetched": self.fetched_at.isoformat(timespec="seconds"),
        }
