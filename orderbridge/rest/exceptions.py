class ShopifyClientError(Exception):
    """Base exception for all storefront API client errors."""


class ShopifyRateLimitError(ShopifyClientError):
    """Raised when API returns 429 Too Many Requests."""


class ShopifyValidationError(ShopifyClientError):
    """Raised when the API response format is invalid or malformed."""


class ShopifyHTTPError(ShopifyClientError):
    """Raised for unexpected non-2xx HTTP responses."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
