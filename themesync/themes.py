"""Resolution of the configured theme id against the shop's themes."""

import logging
from enum import Enum
from typing import Callable, Optional, Union

import click

from .api import ThemeClient
from .exceptions import InvalidThemeError, ThemeResolutionError, ThemeSyncAPIError
from .models import Theme
from .output import OutputFormatter
from .utils import BACKDOOR_KEYWORD, format_preview_url

logger = logging.getLogger(__name__)

CLIENT_FACING_WARNING = "DIRECTLY UPLOADING TO A CLIENT FACING ENVIRONMENT -- CAREFUL!"

ThemeChooser = Callable[[list[Theme]], Theme]


class ResolverState(str, Enum):
    """Lifecycle of a theme resolution."""

    UNRESOLVED = "unresolved"
    LISTING = "listing"
    INTERACTIVE = "interactive"
    RESOLVED = "resolved"
    REJECTED = "rejected"


def prompt_for_theme(themes: list[Theme]) -> Theme:
    """Ask the user to pick a theme from a numbered list."""
    click.echo("Which theme would you like to use?")
    for index, theme in enumerate(themes, start=1):
        click.echo(f"  {index}) {theme.display_name}")
    choice = click.prompt(
        "Theme",
        type=click.IntRange(1, len(themes)),
        default=1,
    )
    return themes[choice - 1]


class ThemeResolver:
    """Confirm the target theme before any asset is touched."""

    def __init__(
        self,
        client: ThemeClient,
        host: str,
        output: Optional[OutputFormatter] = None,
        chooser: Optional[ThemeChooser] = None,
    ):
        """Initialize the resolver.

        Args:
            client: Theme API client
            host: Shop host, used in the connected message
            output: Output formatter for status lines
            chooser: Picks a theme for the backdoor keyword
                (default: interactive prompt)
        """
        self.client = client
        self.host = host
        self.output = output or OutputFormatter()
        self.chooser = chooser or prompt_for_theme
        self.state = ResolverState.UNRESOLVED
        self.theme: Optional[Theme] = None

    def _list_themes(self) -> list[Theme]:
        self.state = ResolverState.LISTING
        try:
            response = self.client.list_themes()
        except ThemeSyncAPIError as e:
            self.state = ResolverState.REJECTED
            self.output.error(str(e))
            raise ThemeResolutionError(f"Could not list themes: {e}") from e

        themes = response.get("themes") if isinstance(response, dict) else None
        if not isinstance(themes, list):
            self.state = ResolverState.REJECTED
            self.output.error("Theme list response contains no themes")
            raise ThemeResolutionError("Theme list response contains no themes")

        return [
            Theme.from_dict(theme)
            for theme in themes
            if isinstance(theme, dict) and "id" in theme
        ]

    def resolve(self, theme_id: Union[int, str]) -> Theme:
        """Resolve a theme id, or the backdoor keyword, to a remote theme.

        Args:
            theme_id: Numeric theme id or ``BACKDOOR``

        Returns:
            The confirmed theme

        Raises:
            ThemeResolutionError: If the theme list cannot be retrieved
            InvalidThemeError: If no theme has the given id
        """
        themes = self._list_themes()

        if theme_id == BACKDOOR_KEYWORD:
            if not themes:
                self.state = ResolverState.REJECTED
                raise ThemeResolutionError("The shop has no themes to choose from")
            self.state = ResolverState.INTERACTIVE
            theme = self.chooser(themes)
        else:
            match = next((t for t in themes if str(t.id) == str(theme_id)), None)
            if match is None:
                self.state = ResolverState.REJECTED
                raise InvalidThemeError(
                    f"Theme {theme_id} not found, "
                    "please make sure you're using a valid theme id"
                )
            theme = match

        if theme.is_client_facing:
            self.output.warning(CLIENT_FACING_WARNING)

        self.output.info(
            f"Connected to: {format_preview_url(self.host, theme.id)} "
            f"theme name: {theme.name}"
        )
        logger.debug("Resolved theme %s (%s)", theme.id, theme.role or "no role")

        self.theme = theme
        self.state = ResolverState.RESOLVED
        return theme
