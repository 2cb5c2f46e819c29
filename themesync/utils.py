"""Utility functions for themesync."""

from binaryornot.helpers import is_binary_string

# =============================================================================
# Constants for the remote theme API
# =============================================================================

# The API is only served over TLS
DEFAULT_PORT: int = 443

# Request timeout (seconds); a large binary asset can take a while
DEFAULT_TIMEOUT: float = 120.0

# Theme id that triggers the interactive theme selection
BACKDOOR_KEYWORD: str = "BACKDOOR"


# =============================================================================
# Binary content detection
# =============================================================================

# Number of leading bytes handed to the detector
BINARY_SNIFF_SIZE: int = 1024


def is_binary_content(data: bytes) -> bool:
    """Decide whether file content should be sent as a base64 attachment.

    The decision is made from the content itself, never from the file
    extension. ``binaryornot`` inspects the leading bytes, and anything
    that does not decode as UTF-8 is binary too, so a text payload always
    decodes cleanly.

    Args:
        data: Raw file content

    Returns:
        True if the content is binary

    Examples:
        >>> is_binary_content(b"body { color: red; }")
        False
        >>> is_binary_content(b"\\x89PNG\\r\\n\\x1a\\n\\x00\\x00")
        True
    """
    if not data:
        return False

    sample = bytes(data[:BINARY_SNIFF_SIZE])
    if b"\x00" in sample or is_binary_string(sample):
        return True

    try:
        bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


# =============================================================================
# Theme id helpers
# =============================================================================


def is_theme_id(value: object) -> bool:
    """Check whether a value can be used as a numeric theme id.

    Examples:
        >>> is_theme_id("123456")
        True
        >>> is_theme_id(123456)
        True
        >>> is_theme_id("abc")
        False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if not isinstance(value, str):
        return False
    value = value.strip()
    return value.isascii() and value.isdigit()


def format_preview_url(host: str, theme_id: object) -> str:
    """Build the storefront preview URL for a theme."""
    return f"https://{host}/?preview_theme_id={theme_id}"
