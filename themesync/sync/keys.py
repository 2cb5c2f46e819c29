"""Mapping between local file paths and remote asset keys."""

import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from ..models import FileEvent

logger = logging.getLogger(__name__)

# Characters left alone by URI encoding (besides letters, digits and "_.-~")
URI_SAFE_CHARS = ";,/?:@&=+$!*'()#"

PathLike = Union[str, Path]


class BasePathResolver:
    """Resolve the directory asset keys are computed from.

    The first resolved value is kept for the lifetime of the resolver, so
    every key of one sync session is relative to the same directory.
    """

    def __init__(self) -> None:
        self._base_path: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self._base_path is not None

    def set(self, base_path: PathLike) -> None:
        """Pin the base path explicitly (e.g. from the ``basePath`` option)."""
        self._base_path = os.path.abspath(base_path)

    def get(self, explicit: Optional[PathLike] = None) -> str:
        """Return the base path, resolving it on the first call.

        Args:
            explicit: Base directory to use if none is resolved yet; empty
                or None means the current working directory

        Returns:
            Absolute base path
        """
        if self._base_path is None:
            if explicit:
                self._base_path = os.path.abspath(explicit)
            else:
                self._base_path = os.getcwd()
            logger.debug("Using base path %s", self._base_path)
        return self._base_path


def make_relative_path(filepath: PathLike, base_path: PathLike) -> str:
    """Make ``filepath`` relative to ``base_path`` with forward slashes.

    Raises:
        ValueError: If no relative path exists (e.g. different drives)
    """
    relative = os.path.relpath(os.fspath(filepath), os.fspath(base_path))
    return relative.replace("\\", "/")


def make_asset_key(filepath: PathLike, base_path: PathLike) -> str:
    """Convert a local file path to a remote asset key.

    The local path may sit below a deeper directory than the theme root,
    e.g. ``shop/assets/site.css`` while the API expects
    ``assets/site.css``; ``base_path`` is that theme root.

    Args:
        filepath: Absolute or CWD-relative file path
        base_path: Theme root directory

    Returns:
        URI-encoded key using forward slashes

    Examples:
        >>> make_asset_key("/proj/assets/site.css", "/proj")
        'assets/site.css'
        >>> make_asset_key("/proj/assets/my file.css", "/proj")
        'assets/my%20file.css'
    """
    return quote(make_relative_path(filepath, base_path), safe=URI_SAFE_CHARS)


def get_pretty_path(event: FileEvent, base_path: PathLike) -> str:
    """Human-readable path for status lines."""
    return os.path.join(os.fspath(base_path), event.relative)
