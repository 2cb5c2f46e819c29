"""Request payloads for asset uploads."""

import base64
from typing import Any, Optional

from ..utils import is_binary_content


def build_asset_payload(key: str, contents: Optional[bytes]) -> dict[str, Any]:
    """Build the body of an asset update request.

    Binary content is sent base64-encoded as ``attachment``; text content
    is sent decoded as ``value``. Exactly one of the two is set.

    Args:
        key: Asset key
        contents: Full file content

    Returns:
        ``{"asset": {"key": key, "value" | "attachment": ...}}``

    Raises:
        ValueError: If ``contents`` is None (deletions have no payload)
    """
    if contents is None:
        raise ValueError(f"No content to upload for {key}")

    data = bytes(contents)
    asset: dict[str, Any] = {"key": key}

    if is_binary_content(data):
        asset["attachment"] = base64.b64encode(data).decode("ascii")
    else:
        asset["value"] = data.decode("utf-8")

    return {"asset": asset}
