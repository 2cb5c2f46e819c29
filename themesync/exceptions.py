"""Exceptions raised by themesync."""

from typing import Any, Optional


class ThemeSyncError(Exception):
    """Base exception for all themesync errors."""


class ThemeSyncConfigError(ThemeSyncError):
    """Raised when credentials or options are missing or invalid."""


class InvalidThemeError(ThemeSyncConfigError):
    """Raised when a theme id is malformed or does not exist remotely."""


class ThemeResolutionError(ThemeSyncError):
    """Raised when the list of remote themes cannot be retrieved."""


class UnsupportedEventError(ThemeSyncError):
    """Raised for file events whose contents are an open stream."""


class ThemeSyncAPIError(ThemeSyncError):
    """Error returned by the remote theme API.

    Every API error carries a ``type`` tag and, for validation failures,
    a ``detail`` mapping such as ``{"asset": ["is invalid"]}``.
    """

    type = "ShopifyAPIError"

    def __init__(
        self,
        message: str,
        detail: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code


class ThemeSyncAuthenticationError(ThemeSyncAPIError):
    """Invalid API key or password."""

    type = "ShopifyAuthenticationError"


class ThemeSyncPermissionError(ThemeSyncAPIError):
    """The credentials lack the required access scope."""

    type = "ShopifyPermissionError"


class ThemeSyncNotFoundError(ThemeSyncAPIError):
    """Theme or asset not found."""

    type = "ShopifyNotFoundError"


class ThemeSyncInvalidRequestError(ThemeSyncAPIError):
    """The remote service rejected the request (HTTP 422)."""

    type = "ShopifyInvalidRequestError"


class ThemeSyncRateLimitError(ThemeSyncAPIError):
    """The leaky bucket is full (HTTP 429)."""

    type = "ShopifyRateLimitError"


class ThemeSyncNetworkError(ThemeSyncAPIError):
    """Transport failure or request timeout."""

    type = "ShopifyNetworkError"


class ThemeSyncInvalidResponseError(ThemeSyncAPIError):
    """The server answered with something that is not JSON."""

    type = "ShopifyInvalidResponseError"
