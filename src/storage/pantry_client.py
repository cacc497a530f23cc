# src/storage/pantry_client.py

"""Client for Pantry (getpantry.cloud) JSON baskets.

A basket is a named JSON document addressed by ``(api_key, name)``.
Every method performs exactly one HTTP exchange and either returns or
raises; nothing is cached and nothing is retried.
"""

import dataclasses
import json
import logging
from datetime import date, datetime, timezone
from types import TracebackType
from typing import Any, TypeVar

from curl_cffi import CurlError
from curl_cffi import requests as curl_requests

from src.config.settings import Settings, StoreConfig
from src.errors import DecodeError, RemoteAPIError, TransportError

logger = logging.getLogger("price_tracker.pantry")

T = TypeVar("T")

_JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


def basket_name(day: date | datetime) -> str:
    """Return the basket name for a trading day, e.g. ``prices_2025_06_17``.

    Aware datetimes are converted to UTC first so that the name does
    not depend on the caller's local timezone.
    """
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(timezone.utc)
        day = day.date()
    return f"{Settings.BASKET_PREFIX}_{day.strftime('%Y_%m_%d')}"


def _status_line(resp: curl_requests.Response) -> str:
    reason = getattr(resp, "reason", "") or ""
    return f"{resp.status_code} {reason}".strip()


def _error_message(resp: curl_requests.Response) -> str:
    """Prefer Pantry's ``{"message": ...}`` body, else the status line."""
    try:
        body: Any = json.loads(resp.text)
    except (TypeError, ValueError):
        return _status_line(resp)
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return str(body["message"])
    return _status_line(resp)


class BasketManager:
    """CRUD operations on the baskets of one Pantry."""

    def __init__(
        self,
        config: StoreConfig,
        session: curl_requests.Session | None = None,
        base_url: str = Settings.PANTRY_BASE_URL,
    ) -> None:
        self.settings = Settings()
        self.base_url = base_url.rstrip("/")
        self._api_key = config.api_key
        self.session = session or curl_requests.Session()

    # ── Private helpers ──────────────────────────────────

    def _basket_url(self, name: str) -> str:
        return f"{self.base_url}/{self._api_key}/basket/{name}"

    def _request(
        self,
        method: str,
        url: str,
        operation: str,
        timeout: float | None,
        **kwargs: Any,
    ) -> curl_requests.Response:
        """Send one request, mapping curl failures to TransportError."""
        try:
            resp = self.session.request(
                method,
                url,
                timeout=(
                    timeout
                    if timeout is not None
                    else self.settings.REQUEST_TIMEOUT
                ),
                **kwargs,
            )
        except CurlError as exc:
            logger.error(
                "[pantry] %s request failed: %s",
                operation,
                exc,
                exc_info=True,
            )
            raise TransportError(operation, exc) from exc
        logger.debug(
            "[pantry] %s %s -> HTTP %d", method, operation, resp.status_code
        )
        return resp

    def _raise_for_status(
        self, resp: curl_requests.Response, operation: str
    ) -> None:
        if resp.status_code != 200:
            message = _error_message(resp)
            logger.warning("[pantry] %s failed: %s", operation, message)
            raise RemoteAPIError(operation, message, resp.status_code)

    @staticmethod
    def _decode_json(resp: curl_requests.Response, operation: str) -> Any:
        try:
            return json.loads(resp.text)
        except (TypeError, ValueError) as exc:
            raise DecodeError(operation, f"invalid JSON: {exc}") from exc

    # ── Public API ───────────────────────────────────────

    def exists(self, name: str, timeout: float | None = None) -> bool:
        """Return True iff GET on the basket answers 200.

        Any other status (including 404) means "does not exist";
        transport failures raise :class:`TransportError` instead.
        """
        resp = self._request(
            "GET", self._basket_url(name), f"check basket {name}", timeout
        )
        return resp.status_code == 200

    def create(self, name: str, timeout: float | None = None) -> None:
        """Create an empty basket. Pantry rejects existing names."""
        operation = f"create basket {name}"
        resp = self._request(
            "POST",
            self._basket_url(name),
            operation,
            timeout,
            headers=_JSON_HEADERS,
        )
        self._raise_for_status(resp, operation)
        logger.info("[pantry] Created basket %s", name)

    def update(
        self, name: str, payload: Any, timeout: float | None = None
    ) -> None:
        """Upsert ``payload`` as the basket's JSON content."""
        operation = f"update basket {name}"
        try:
            body = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                operation, f"payload is not JSON serialisable: {exc}"
            ) from exc

        resp = self._request(
            "PUT",
            self._basket_url(name),
            operation,
            timeout,
            headers=_JSON_HEADERS,
            data=body.encode("utf-8"),
        )
        self._raise_for_status(resp, operation)
        logger.info(
            "[pantry] Updated basket %s (%d bytes)", name, len(body)
        )

    def get(
        self,
        name: str,
        target: type[T] = dict,  # type: ignore[assignment]
        timeout: float | None = None,
    ) -> T:
        """Fetch a basket and decode it into ``target``.

        ``target`` may be ``dict`` (the raw JSON object) or a dataclass,
        which is built from the object's keys.

        Raises:
            RemoteAPIError: Pantry answered with a non-OK status.
            DecodeError: The body is not JSON or does not fit ``target``.
        """
        operation = f"get basket {name}"
        resp = self._request(
            "GET", self._basket_url(name), operation, timeout
        )
        self._raise_for_status(resp, operation)

        data = self._decode_json(resp, operation)
        if not isinstance(data, dict):
            raise DecodeError(
                operation,
                f"expected a JSON object, got {type(data).__name__}",
            )
        if target is dict:
            return data  # type: ignore[return-value]
        if dataclasses.is_dataclass(target):
            try:
                return target(**data)
            except TypeError as exc:
                raise DecodeError(
                    operation,
                    f"body does not match {target.__name__}: {exc}",
                ) from exc
        raise TypeError(
            f"Unsupported target {target!r}; use dict or a dataclass"
        )

    def list_baskets(self, timeout: float | None = None) -> list[str]:
        """Return the names of every basket in the pantry."""
        operation = "list baskets"
        resp = self._request(
            "GET",
            f"{self.base_url}/{self._api_key}/baskets",
            operation,
            timeout,
        )
        self._raise_for_status(resp, operation)

        data = self._decode_json(resp, operation)
        if not isinstance(data, list) or not all(
            isinstance(item, str) for item in data
        ):
            raise DecodeError(
                operation, "expected a JSON array of basket names"
            )
        return list(data)

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "BasketManager":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
