"""Sync engine that turns file change events into remote asset calls."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Callable, Optional, Union

from ..api import ThemeClient, get_api
from ..exceptions import (
    InvalidThemeError,
    ThemeResolutionError,
    ThemeSyncConfigError,
    ThemeSyncError,
    UnsupportedEventError,
)
from ..models import FileEvent, OperationResult, Theme
from ..output import OutputFormatter
from ..themes import ThemeChooser, ThemeResolver
from ..utils import BACKDOOR_KEYWORD, is_theme_id
from .keys import BasePathResolver
from .operations import AssetOperations

logger = logging.getLogger(__name__)

PLUGIN_NAME = "themesync"

EventCallback = Callable[[Optional[ThemeSyncError], Optional[FileEvent]], None]
ErrorHandler = Callable[[ThemeSyncError], None]


class SyncEngine:
    """Reconcile a sequence of file events with the remote theme.

    Each event is handled completely, remote call included, before it is
    forwarded and before the next event is admitted.
    """

    def __init__(
        self,
        client: ThemeClient,
        host: str,
        theme_id: Union[int, str, None],
        base_path: str,
        output: Optional[OutputFormatter] = None,
        chooser: Optional[ThemeChooser] = None,
        on_error: Optional[ErrorHandler] = None,
    ):
        """Initialize sync engine.

        Args:
            client: Theme API client shared by every operation
            host: Shop host name
            theme_id: Numeric theme id, ``BACKDOOR``, or None for pass-through
            base_path: Directory asset keys are relative to
            output: Output formatter for displaying status lines
            chooser: Theme picker used for ``BACKDOOR``
            on_error: Receives errors for events that cannot be processed
        """
        self.client = client
        self.host = host
        self.theme_id = theme_id
        self.base_path = base_path
        self.output = output or OutputFormatter()
        self.on_error = on_error or self._report_error
        self.resolver = ThemeResolver(client, host, self.output, chooser)
        self.operations = AssetOperations(client, base_path, self.output)
        self.theme: Optional[Theme] = None
        self.stats = {
            "uploaded": 0,
            "removed": 0,
            "failed": 0,
            "skipped": 0,
            "forwarded": 0,
        }

    @property
    def passthrough(self) -> bool:
        """True when no theme is configured and events are only forwarded."""
        return self.theme_id is None

    @property
    def is_ready(self) -> bool:
        return self.passthrough or self.theme is not None

    def start(self) -> Optional[Theme]:
        """Resolve the target theme once; later calls are no-ops.

        Raises:
            ThemeResolutionError: If the theme list cannot be retrieved
            InvalidThemeError: If the configured theme does not exist
        """
        if self.theme is None and self.theme_id is not None:
            self.theme = self.resolver.resolve(self.theme_id)
        return self.theme

    def _report_error(self, error: ThemeSyncError) -> None:
        self.output.error(f"{PLUGIN_NAME}: {error}")

    def _record(self, result: OperationResult) -> None:
        if not result.success:
            self.stats["failed"] += 1
        elif result.action == "upload":
            self.stats["uploaded"] += 1
        else:
            self.stats["removed"] += 1

    def _forward(self, event: FileEvent, callback: EventCallback) -> None:
        self.stats["forwarded"] += 1
        callback(None, event)

    def process_event(self, event: FileEvent, callback: EventCallback) -> None:
        """Handle one file event.

        ``callback(error, event)`` is invoked exactly once: with the
        original event after its remote call has finished, or with
        ``(None, None)`` if the event was dropped.

        Args:
            event: File change event
            callback: Receives the event to forward downstream
        """
        if event.is_stream():
            self.stats["skipped"] += 1
            self.on_error(UnsupportedEventError("Streams are not supported!"))
            callback(None, None)
            return

        if self.passthrough:
            self._forward(event, callback)
            return

        theme = self.start()
        if theme is None:
            raise ThemeResolutionError("No theme was resolved for this shop")
        theme_id = theme.id

        def on_done(result: OperationResult) -> None:
            self._record(result)
            self._forward(event, callback)

        if event.is_buffer():
            self.operations.upload(event, theme_id, on_done)
        elif event.is_null():
            # A null event means the file was deleted locally
            self.operations.destroy(event, theme_id, on_done)
        else:
            logger.debug("No remote action for %s, forwarding", event.path)
            self.stats["skipped"] += 1
            self._forward(event, callback)

    def process(self, events: Iterable[FileEvent]) -> Iterator[FileEvent]:
        """Process events in order, yielding each one once it is synced.

        Args:
            events: File change events from a scanner or watcher

        Yields:
            The original events, unchanged, after their remote calls
        """
        for event in events:
            forwarded: list[FileEvent] = []

            def collect(
                error: Optional[ThemeSyncError], item: Optional[FileEvent]
            ) -> None:
                if item is not None:
                    forwarded.append(item)

            self.process_event(event, collect)
            yield from forwarded


def create_engine(
    api_key: Optional[str],
    password: Optional[str],
    host: Optional[str],
    theme_id: Union[int, str, None] = None,
    options: Optional[dict[str, Any]] = None,
    output: Optional[OutputFormatter] = None,
    chooser: Optional[ThemeChooser] = None,
    client: Optional[ThemeClient] = None,
) -> SyncEngine:
    """Validate the configuration and build a sync engine.

    Nothing is sent to the remote service here; the theme is resolved when
    :meth:`SyncEngine.start` is called or the first event needs it.

    Args:
        api_key: Private app API key
        password: Private app password
        host: Shop host name
        theme_id: Numeric theme id, ``BACKDOOR``, or None for pass-through
        options: ``basePath`` overrides the directory keys are relative to
        output: Output formatter for status lines
        chooser: Theme picker used for ``BACKDOOR``
        client: Client to use instead of the process-wide one

    Returns:
        Configured sync engine

    Raises:
        ThemeSyncConfigError: If a credential or the host is missing
        InvalidThemeError: If theme_id is neither numeric nor ``BACKDOOR``
    """
    if not api_key:
        raise ThemeSyncConfigError("Error, API Key for shopify does not exist!")
    if not password:
        raise ThemeSyncConfigError("Error, password for shopify does not exist!")
    if not host:
        raise ThemeSyncConfigError("Error, host for shopify does not exist!")
    if (
        theme_id is not None
        and theme_id != BACKDOOR_KEYWORD
        and not is_theme_id(theme_id)
    ):
        raise InvalidThemeError("Error, not a valid theme id!")

    options = options or {}
    base_resolver = BasePathResolver()
    if options.get("basePath"):
        base_resolver.set(options["basePath"])
    base_path = base_resolver.get()

    if isinstance(theme_id, str) and theme_id != BACKDOOR_KEYWORD:
        theme_id = theme_id.strip()

    return SyncEngine(
        client=client or get_api(api_key, password, host),
        host=host,
        theme_id=theme_id,
        base_path=base_path,
        output=output,
        chooser=chooser,
    )
