"""Event sources feeding the sync engine."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from watchfiles import Change, watch

from ..models import FileEvent

logger = logging.getLogger(__name__)


def is_hidden(path: Path, base_path: Path) -> bool:
    """Check whether any component below ``base_path`` starts with a dot."""
    try:
        parts = path.relative_to(base_path).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def scan_directory(base_path: Path) -> Iterator[FileEvent]:
    """Yield a buffered event for every file below ``base_path``.

    Hidden files and directories are skipped. Files are visited in sorted
    order so that deploys are reproducible.

    Args:
        base_path: Theme root directory

    Yields:
        Buffered file events
    """
    base_path = base_path.absolute()
    for path in sorted(base_path.rglob("*")):
        if not path.is_file() or is_hidden(path, base_path):
            continue
        try:
            yield FileEvent.from_path(path, base_path)
        except PermissionError as e:
            logger.warning("Permission denied: %s", e)


def watch_directory(
    base_path: Path, stop_event: Optional[object] = None
) -> Iterator[FileEvent]:
    """Yield events for files created, modified or deleted below ``base_path``.

    Args:
        base_path: Theme root directory
        stop_event: Optional ``threading.Event`` that ends the watch

    Yields:
        Buffered events for added/modified files, null events for deletions
    """
    base_path = base_path.absolute()
    for changes in watch(base_path, stop_event=stop_event):
        for change_type, changed in sorted(changes, key=lambda c: c[1]):
            path = Path(changed)
            if is_hidden(path, base_path):
                continue
            if change_type == Change.deleted:
                yield FileEvent.deleted(path, base_path)
            elif path.is_file():
                try:
                    yield FileEvent.from_path(path, base_path)
                except FileNotFoundError:
                    # Removed again before it could be read
                    logger.debug("File vanished before upload: %s", path)
