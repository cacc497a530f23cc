# src/scrapers/emmsa_scraper.py

"""Scraper for the EMMSA (Lima wholesale market) daily price table."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from types import TracebackType

from bs4 import BeautifulSoup, ParserRejectedMarkup
from curl_cffi import CurlError
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.errors import ParseError, TransportError, UpstreamError
from src.models.price_record import PriceRecord

logger = logging.getLogger("price_tracker.emmsa")

# product, variety, min, max, avg
_MIN_CELLS = 5


def _parse_decimal(text: str) -> Decimal | None:
    """Parse a price cell, returning None when it is not a finite number."""
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def parse_price_table(
    html: str | bytes, target_date: date
) -> list[PriceRecord]:
    """Parse the EMMSA HTML price table into records.

    The first ``<tr>`` is the header and is always skipped. Rows with
    fewer than five cells, or with any price that is not a number, are
    dropped and logged rather than failing the whole table. An empty
    list means the provider had no trading data for ``target_date``.

    Raises:
        ParseError: If the body cannot be parsed as markup at all.
    """
    iso_date = target_date.isoformat()
    logger.debug(
        "Parsing price table for %s (%d bytes)", iso_date, len(html)
    )

    try:
        soup = BeautifulSoup(html, "lxml")
    except (ParserRejectedMarkup, TypeError, ValueError) as exc:
        raise ParseError(
            f"failed to parse HTML for {iso_date}: {exc}"
        ) from exc

    records: list[PriceRecord] = []
    for idx, row in enumerate(soup.select("table tr")):
        if idx == 0:
            continue

        cells = [td.get_text(strip=True) for td in row.find_all("td")]
        if len(cells) < _MIN_CELLS:
            logger.debug(
                "Skipping short row %d (%d cells)", idx, len(cells)
            )
            continue

        product, variety, min_text, max_text, avg_text = cells[:_MIN_CELLS]
        min_price = _parse_decimal(min_text)
        max_price = _parse_decimal(max_text)
        avg_price = _parse_decimal(avg_text)
        if min_price is None or max_price is None or avg_price is None:
            logger.warning(
                "Skipping row with invalid price data: %s / %s: %r, %r, %r",
                product,
                variety,
                min_text,
                max_text,
                avg_text,
            )
            continue

        records.append(
            PriceRecord(
                date=iso_date,
                product=product,
                variety=variety,
                min_price=min_price,
                max_price=max_price,
                avg_price=avg_price,
            )
        )

    logger.info("Parsed %d price records for %s", len(records), iso_date)
    return records


class EmmsaScraper:
    """Fetches the daily price report from the EMMSA reporting endpoint.

    The endpoint answers a form POST with an HTML fragment holding one
    table of every product and variety traded that day. One call makes
    exactly one request; retrying is left to the caller.
    """

    def __init__(
        self, session: curl_requests.Session | None = None
    ) -> None:
        self.settings = Settings()
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def fetch_prices(
        self,
        target_date: date,
        timeout: float | None = None,
    ) -> list[PriceRecord]:
        """Fetch and parse the price table for ``target_date``.

        Args:
            target_date: Trading day to request.
            timeout: Deadline in seconds for this call; defaults to
                ``Settings.REQUEST_TIMEOUT``.

        Raises:
            TransportError: The request failed before a response arrived.
            UpstreamError: EMMSA answered with a non-2xx status.
            ParseError: The body is not parseable markup.
        """
        formatted = target_date.strftime(self.settings.EMMSA_DATE_FORMAT)
        logger.info("Fetching prices for date: %s", formatted)

        form = {
            **self.settings.EMMSA_FORM_DEFAULTS,
            "vfecha": formatted,
        }
        try:
            resp = self.session.post(
                self.settings.EMMSA_API_URL,
                headers=dict(self.settings.EMMSA_HEADERS),
                data=form,
                timeout=(
                    timeout
                    if timeout is not None
                    else self.settings.REQUEST_TIMEOUT
                ),
            )
        except CurlError as exc:
            logger.error(
                "EMMSA request for %s failed: %s",
                formatted,
                exc,
                exc_info=True,
            )
            raise TransportError(
                f"fetch prices for {target_date.isoformat()}", exc
            ) from exc

        if not 200 <= resp.status_code < 300:
            logger.error(
                "EMMSA returned HTTP %d for %s",
                resp.status_code,
                formatted,
            )
            raise UpstreamError(resp.status_code, resp.text)

        return parse_price_table(resp.text, target_date)

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "EmmsaScraper":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
