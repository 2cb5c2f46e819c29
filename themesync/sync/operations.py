"""Upload and delete operations for single theme assets."""

import logging
from typing import Callable, Optional, Union

from ..api import ThemeClient
from ..exceptions import ThemeSyncAPIError, ThemeSyncInvalidRequestError
from ..models import FileEvent, OperationResult
from ..output import OutputFormatter
from .keys import get_pretty_path, make_asset_key
from .payload import build_asset_payload

logger = logging.getLogger(__name__)

ThemeId = Union[int, str, None]
DoneCallback = Callable[[OperationResult], None]


def format_api_error(error: ThemeSyncAPIError, relative_path: str) -> str:
    """Build the one-line description of a failed asset call.

    Validation errors list the messages the API reported for the asset,
    everything else is reported by its error type.

    Examples:
        >>> err = ThemeSyncInvalidRequestError("", detail={"asset": ["is invalid"]})
        >>> format_api_error(err, "assets/site.css")
        'is invalid in assets/site.css'
    """
    if isinstance(error, ThemeSyncInvalidRequestError) and error.detail:
        messages = error.detail.get("asset")
        if messages is None:
            messages = [msg for values in error.detail.values() for msg in values]
        return f"{', '.join(str(msg) for msg in messages)} in {relative_path}"
    return f"Shopify API response error: {error.type}"


class AssetOperations:
    """Create, update and delete remote assets for local file events."""

    def __init__(
        self,
        client: ThemeClient,
        base_path: str,
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize asset operations.

        Args:
            client: Theme API client shared by all operations
            base_path: Directory asset keys are relative to
            output: Output formatter for status lines
        """
        self.client = client
        self.base_path = base_path
        self.output = output or OutputFormatter()

    def upload(
        self,
        event: FileEvent,
        theme_id: ThemeId,
        on_done: Optional[DoneCallback] = None,
    ) -> OperationResult:
        """Upload a buffered file event as an asset.

        Assets must live in one of the theme directories (``assets/``,
        ``config/``, ``layout/``, ``locales/``, ``sections/``,
        ``snippets/``, ``templates/``); the API rejects other keys.

        Args:
            event: Buffered file event
            theme_id: Target theme, or None for the legacy asset store
            on_done: Called exactly once with the result

        Returns:
            Result of the operation; errors are reported, never raised
        """
        result = self._upload(event, theme_id)
        if on_done is not None:
            on_done(result)
        return result

    def _upload(self, event: FileEvent, theme_id: ThemeId) -> OperationResult:
        try:
            key = make_asset_key(event.path, self.base_path)
        except ValueError as e:
            self.output.error(f"Cannot map {event.path} to an asset key: {e}")
            return OperationResult("upload", None, False, str(e))

        payload = build_asset_payload(key, event.contents)  # type: ignore[arg-type]
        self.output.info(f"Uploading: {get_pretty_path(event, self.base_path)}")

        try:
            self.client.update_asset(theme_id, payload)
        except ThemeSyncAPIError as e:
            logger.debug("Upload of %s failed: %r", key, e)
            message = format_api_error(e, event.relative)
            self.output.error(message)
            return OperationResult("upload", key, False, message)

        self.output.success(f"Upload Complete: {event.relative}")
        return OperationResult("upload", key, True)

    def destroy(
        self,
        event: FileEvent,
        theme_id: ThemeId,
        on_done: Optional[DoneCallback] = None,
    ) -> OperationResult:
        """Delete the asset of a removed file.

        Args:
            event: Null (deleted) file event
            theme_id: Target theme, or None for the legacy asset store
            on_done: Called exactly once with the result

        Returns:
            Result of the operation; errors are reported, never raised
        """
        result = self._destroy(event, theme_id)
        if on_done is not None:
            on_done(result)
        return result

    def _destroy(self, event: FileEvent, theme_id: ThemeId) -> OperationResult:
        try:
            key = make_asset_key(event.path, self.base_path)
        except ValueError as e:
            self.output.error(f"Cannot map {event.path} to an asset key: {e}")
            return OperationResult("delete", None, False, str(e))

        pretty_path = get_pretty_path(event, self.base_path)
        self.output.info(f"Removing file: {pretty_path}")

        try:
            self.client.delete_asset(theme_id, key)
        except ThemeSyncAPIError as e:
            logger.debug("Delete of %s failed: %r", key, e)
            message = format_api_error(e, event.relative)
            self.output.error(message)
            return OperationResult("delete", key, False, message)

        self.output.success(f"File removed: {pretty_path}")
        return OperationResult("delete", key, True)
