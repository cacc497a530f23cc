# src/services/price_tracker.py

"""Fetch a day's prices and optionally persist them to Pantry."""

import logging
from datetime import date, datetime, timezone

from src.models.price_record import PriceBatch
from src.scrapers.emmsa_scraper import EmmsaScraper
from src.storage.pantry_client import BasketManager, basket_name

logger = logging.getLogger("price_tracker.tracker")


class PriceTracker:
    """Coordinates the EMMSA scraper and the Pantry basket store."""

    def __init__(
        self,
        scraper: EmmsaScraper | None = None,
        basket_manager: BasketManager | None = None,
    ) -> None:
        self.scraper = scraper or EmmsaScraper()
        self.basket_manager = basket_manager

    def collect(self, target_date: date) -> PriceBatch:
        """Scrape ``target_date`` and wrap the rows in a PriceBatch."""
        prices = self.scraper.fetch_prices(target_date)
        if not prices:
            logger.warning(
                "No trading data published for %s",
                target_date.isoformat(),
            )
        return PriceBatch(
            date=target_date.isoformat(),
            prices=prices,
            fetched_at=datetime.now(timezone.utc),
        )

    def save_to_pantry(self, batch: PriceBatch) -> str:
        """Upsert ``batch`` into its date basket and return the name.

        Creates the basket first when it does not exist yet.
        """
        if self.basket_manager is None:
            raise RuntimeError("PriceTracker has no BasketManager configured")

        name = basket_name(date.fromisoformat(batch.date))
        if not self.basket_manager.exists(name):
            self.basket_manager.create(name)
            logger.info("Created new Pantry basket: %s", name)

        self.basket_manager.update(name, batch.to_dict())
        logger.info(
            "Stored %d prices in Pantry basket: %s", len(batch.prices), name
        )
        return name
