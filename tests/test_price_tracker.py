# tests/test_price_tracker.py

"""Tests for the PriceTracker fetch/persist orchestration."""

import unittest
from datetime import date, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from src.errors import RemoteAPIError, TransportError, UpstreamError
from src.models.price_record import PriceRecord
from src.services.price_tracker import PriceTracker

TRADING_DAY = date(2025, 6, 17)


def _record(product: str = "PAPA") -> PriceRecord:
    return PriceRecord(
        date="2025-06-17",
        product=product,
        variety="AMARILLA",
        min_price=Decimal("2.80"),
        max_price=Decimal("3.20"),
        avg_price=Decimal("3.00"),
    )


class TestCollect(unittest.TestCase):
    """collect() wraps scraper output in a PriceBatch."""

    def test_collect_builds_batch(self) -> None:
        """The batch carries the date, records, and a UTC fetch time."""
        scraper = MagicMock()
        scraper.fetch_prices.return_value = [_record(), _record("OCA")]

        batch = PriceTracker(scraper).collect(TRADING_DAY)

        scraper.fetch_prices.assert_called_once_with(TRADING_DAY)
        self.assertEqual(batch.date, "2025-06-17")
        self.assertEqual([p.product for p in batch.prices], ["PAPA", "OCA"])
        self.assertEqual(batch.fetched_at.tzinfo, timezone.utc)

    def test_collect_empty_day(self) -> None:
        """No trading data is an empty batch, not an error."""
        scraper = MagicMock()
        scraper.fetch_prices.return_value = []

        with self.assertLogs("price_tracker.tracker", level="WARNING"):
            batch = PriceTracker(scraper).collect(TRADING_DAY)

        self.assertEqual(batch.prices, [])

    def test_collect_propagates_scraper_errors(self) -> None:
        """Upstream failures are not swallowed."""
        scraper = MagicMock()
        scraper.fetch_prices.side_effect = UpstreamError(500, "boom")

        with self.assertRaises(UpstreamError):
            PriceTracker(scraper).collect(TRADING_DAY)


class TestSaveToPantry(unittest.TestCase):
    """save_to_pantry() runs exists -> create -> update."""

    def _batch(self) -> tuple[PriceTracker, MagicMock]:
        scraper = MagicMock()
        scraper.fetch_prices.return_value = [_record()]
        manager = MagicMock()
        return PriceTracker(scraper, manager), manager

    def test_creates_missing_basket_then_updates(self) -> None:
        """A new day's basket is created before the upload."""
        tracker, manager = self._batch()
        manager.exists.return_value = False
        batch = tracker.collect(TRADING_DAY)

        name = tracker.save_to_pantry(batch)

        self.assertEqual(name, "prices_2025_06_17")
        manager.exists.assert_called_once_with("prices_2025_06_17")
        manager.create.assert_called_once_with("prices_2025_06_17")
        manager.update.assert_called_once_with(
            "prices_2025_06_17", batch.to_dict()
        )

    def test_existing_basket_is_only_updated(self) -> None:
        """create() is skipped when the basket already exists."""
        tracker, manager = self._batch()
        manager.exists.return_value = True

        tracker.save_to_pantry(tracker.collect(TRADING_DAY))

        manager.create.assert_not_called()
        manager.update.assert_called_once()

    def test_uploaded_payload_shape(self) -> None:
        """The stored document is the wrapped date/prices/fetched object."""
        tracker, manager = self._batch()
        manager.exists.return_value = True

        tracker.save_to_pantry(tracker.collect(TRADING_DAY))

        payload = manager.update.call_args.args[1]
        self.assertEqual(set(payload), {"date", "prices", "fetched"})
        self.assertEqual(payload["prices"][0]["product"], "PAPA")

    def test_create_failure_stops_upload(self) -> None:
        """A rejected create propagates and nothing is uploaded."""
        tracker, manager = self._batch()
        manager.exists.return_value = False
        manager.create.side_effect = RemoteAPIError(
            "create basket prices_2025_06_17", "invalid request", 400
        )

        with self.assertRaises(RemoteAPIError):
            tracker.save_to_pantry(tracker.collect(TRADING_DAY))
        manager.update.assert_not_called()

    def test_transport_error_on_exists_propagates(self) -> None:
        """An unreachable store is not mistaken for a missing basket."""
        tracker, manager = self._batch()
        manager.exists.side_effect = TransportError(
            "check basket prices_2025_06_17", OSError("refused")
        )

        with self.assertRaises(TransportError):
            tracker.save_to_pantry(tracker.collect(TRADING_DAY))
        manager.create.assert_not_called()

    def test_requires_basket_manager(self) -> None:
        """Saving without a store configured is a programming error."""
        scraper = MagicMock()
        scraper.fetch_prices.return_value = []
        tracker = PriceTracker(scraper)

        with self.assertRaises(RuntimeError):
            tracker.save_to_pantry(tracker.collect(TRADING_DAY))


if __name__ == "__main__":
    unittest.main()
