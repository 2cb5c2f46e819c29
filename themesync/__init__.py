"""themesync - keep a local storefront theme in sync with the remote theme API."""

from .api import ThemeClient, get_api, reset_api
from .exceptions import (
    InvalidThemeError,
    ThemeResolutionError,
    ThemeSyncAPIError,
    ThemeSyncAuthenticationError,
    ThemeSyncConfigError,
    ThemeSyncError,
    ThemeSyncInvalidRequestError,
    ThemeSyncInvalidResponseError,
    ThemeSyncNetworkError,
    ThemeSyncNotFoundError,
    ThemeSyncPermissionError,
    ThemeSyncRateLimitError,
    UnsupportedEventError,
)
from .models import FileEvent, Theme
from .sync import SyncEngine, create_engine
from .utils import is_binary_content

__all__ = [
    "ThemeClient",
    "get_api",
    "reset_api",
    "SyncEngine",
    "create_engine",
    "FileEvent",
    "Theme",
    "InvalidThemeError",
    "ThemeResolutionError",
    "ThemeSyncAPIError",
    "ThemeSyncAuthenticationError",
    "ThemeSyncConfigError",
    "ThemeSyncError",
    "ThemeSyncInvalidRequestError",
    "ThemeSyncInvalidResponseError",
    "ThemeSyncNetworkError",
    "ThemeSyncNotFoundError",
    "ThemeSyncPermissionError",
    "ThemeSyncRateLimitError",
    "UnsupportedEventError",
    "is_binary_content",
]
