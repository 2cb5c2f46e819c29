"""Sync engine for themesync - file events to remote theme assets."""

from .engine import SyncEngine, create_engine
from .keys import (
    BasePathResolver,
    get_pretty_path,
    make_asset_key,
    make_relative_path,
)
from .operations import AssetOperations, format_api_error
from .payload import build_asset_payload
from .sources import scan_directory, watch_directory

__all__ = [
    "SyncEngine",
    "create_engine",
    "AssetOperations",
    "format_api_error",
    "BasePathResolver",
    "make_asset_key",
    "make_relative_path",
    "get_pretty_path",
    "build_asset_payload",
    "scan_directory",
    "watch_directory",
]
