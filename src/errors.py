# src/errors.py

"""Exception hierarchy shared by the scraper, store client, and CLI."""


class PriceTrackerError(Exception):
    """Base class for every error the price tracker raises."""


class ConfigError(PriceTrackerError):
    """Required configuration is missing or invalid."""


class TransportError(PriceTrackerError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: request failed: {cause}")


class UpstreamError(PriceTrackerError):
    """The price provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"API request failed with status {status_code}: {body}"
        )


class RemoteAPIError(PriceTrackerError):
    """The basket store answered with a non-OK status."""

    def __init__(
        self, operation: str, message: str, status_code: int
    ) -> None:
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(f"failed to {operation}: {message}")


class ParseError(PriceTrackerError):
    """The provider response could not be parsed as markup."""


class DecodeError(PriceTrackerError):
    """A JSON body was invalid or did not match the expected shape."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"failed to {operation}: {detail}")
