"""API client for the remote theme asset service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import (
    ThemeSyncAPIError,
    ThemeSyncAuthenticationError,
    ThemeSyncInvalidRequestError,
    ThemeSyncInvalidResponseError,
    ThemeSyncNetworkError,
    ThemeSyncNotFoundError,
    ThemeSyncPermissionError,
    ThemeSyncRateLimitError,
)
from .utils import DEFAULT_PORT, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CALL_LIMIT_HEADER = "X-Shopify-Shop-Api-Call-Limit"


class ThemeClient:
    """Client for the theme and asset endpoints of the Admin API."""

    def __init__(
        self,
        api_key: str,
        password: str,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the theme API client.

        Args:
            api_key: Private app API key
            password: Private app password
            host: Shop host name (e.g. ``example.myshopify.com``)
            port: HTTPS port (default: 443)
            timeout: Request timeout in seconds (default: 120.0)
        """
        self.auth = f"{api_key}:{password}"
        self.host = host
        self.port = port
        self.timeout = timeout
        self.api_url = f"https://{host}:{port}"

        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            username, password = self.auth.split(":", 1)
            self._client = httpx.Client(
                auth=httpx.BasicAuth(username, password),
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> ThemeClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _handle_http_error(self, e: httpx.HTTPStatusError) -> ThemeSyncAPIError:
        """Translate an HTTP error response into a themesync exception.

        Args:
            e: The HTTP error exception

        Returns:
            Exception to raise
        """
        status_code = e.response.status_code

        if status_code == 401:
            return ThemeSyncAuthenticationError(
                "Invalid API key or password", status_code=status_code
            )
        if status_code == 403:
            return ThemeSyncPermissionError(
                "Access forbidden - check the app's theme permissions",
                status_code=status_code,
            )
        if status_code == 404:
            return ThemeSyncNotFoundError(
                "Resource not found", status_code=status_code
            )
        if status_code == 429:
            return ThemeSyncRateLimitError(
                "API call limit exceeded - please try again later",
                status_code=status_code,
            )

        errors: Any = None
        try:
            if e.response.content:
                body = e.response.json()
                if isinstance(body, dict):
                    errors = body.get("errors") or body.get("error")
        except ValueError:
            # Non-JSON error page, keep the status-based message
            pass

        if status_code == 422:
            if isinstance(errors, dict):
                detail = {
                    field: messages if isinstance(messages, list) else [messages]
                    for field, messages in errors.items()
                }
            elif errors:
                detail = {"asset": errors if isinstance(errors, list) else [errors]}
            else:
                detail = None
            return ThemeSyncInvalidRequestError(
                f"Invalid request: {errors}", detail=detail, status_code=status_code
            )

        error_msg = f"API request failed with status {status_code}"
        if errors:
            error_msg = f"{error_msg}: {errors}"
        return ThemeSyncAPIError(error_msg, status_code=status_code)

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            **kwargs: Additional arguments passed to httpx

        Returns:
            Response JSON data

        Raises:
            ThemeSyncAPIError: If the request fails
        """
        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        client = self._get_client()

        try:
            response = client.request(method, url, **kwargs)
            call_limit = response.headers.get(CALL_LIMIT_HEADER)
            if call_limit:
                logger.debug("API call limit %s after %s %s", call_limit, method, url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._handle_http_error(e) from e
        except httpx.RequestError as e:
            raise ThemeSyncNetworkError(f"Network error: {e}") from e

        if not response.content:
            return {}

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            raise ThemeSyncInvalidResponseError(
                f"Unexpected response type: {content_type}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise ThemeSyncInvalidResponseError(
                "Invalid JSON response from server"
            ) from e

    # =========================
    # Themes
    # =========================

    def list_themes(self) -> Any:
        """List the themes installed on the shop.

        Returns:
            Response dict with a ``themes`` list of ``{id, name, role}``

        Raises:
            ThemeSyncAPIError: If the request fails
        """
        return self._request("GET", "/admin/themes.json")

    # =========================
    # Assets
    # =========================

    @staticmethod
    def _assets_endpoint(theme_id: int | str | None) -> str:
        if theme_id is None:
            return "/admin/assets.json"
        return f"/admin/themes/{theme_id}/assets.json"

    def update_asset(
        self, theme_id: int | str | None, payload: dict[str, Any]
    ) -> Any:
        """Create or update an asset.

        Args:
            theme_id: Target theme, or None for the shop's legacy asset store
            payload: ``{"asset": {"key": ..., "value"|"attachment": ...}}``

        Returns:
            Response dict with the stored ``asset``

        Raises:
            ThemeSyncAPIError: If the request fails
        """
        return self._request("PUT", self._assets_endpoint(theme_id), json=payload)

    def delete_asset(self, theme_id: int | str | None, key: str) -> Any:
        """Delete an asset.

        Args:
            theme_id: Target theme, or None for the shop's legacy asset store
            key: Asset key, sent exactly as uploaded

        Returns:
            Response dict (usually a confirmation message)

        Raises:
            ThemeSyncAPIError: If the request fails
        """
        return self._request(
            "DELETE", self._assets_endpoint(theme_id), params={"asset[key]": key}
        )


_api: ThemeClient | None = None


def get_api(api_key: str, password: str, host: str) -> ThemeClient:
    """Return the process-wide theme client, creating it on first use.

    Only the arguments of the first call are used; later calls return the
    same client whatever credentials they pass.
    """
    global _api
    if _api is None:
        logger.debug("Creating theme API client for %s", host)
        _api = ThemeClient(api_key, password, host)
    return _api


def reset_api() -> None:
    """Close and forget the process-wide client."""
    global _api
    if _api is not None:
        _api.close()
        _api = None
