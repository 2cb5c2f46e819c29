"""Tests for single-asset upload and delete operations."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from themesync.exceptions import (
    ThemeSyncInvalidRequestError,
    ThemeSyncNetworkError,
)
from themesync.models import FileEvent
from themesync.sync.operations import AssetOperations, format_api_error

from .conftest import logged


@pytest.fixture
def operations(mock_client, mock_output):
    return AssetOperations(mock_client, "/proj", mock_output)


def css_event() -> FileEvent:
    return FileEvent(
        path=Path("/proj/assets/site.css"),
        base=Path("/proj"),
        contents=b"body { margin: 0; }",
    )


def deleted_event() -> FileEvent:
    return FileEvent(path=Path("/proj/snippets/foo.liquid"), base=Path("/proj"))


class TestUpload:
    """Tests for AssetOperations.upload."""

    def test_scoped_upload(self, operations, mock_client, mock_output):
        on_done = Mock()

        result = operations.upload(css_event(), 123456, on_done)

        mock_client.update_asset.assert_called_once_with(
            123456,
            {"asset": {"key": "assets/site.css", "value": "body { margin: 0; }"}},
        )
        on_done.assert_called_once_with(result)
        assert result.success
        assert result.key == "assets/site.css"
        assert any(m.startswith("Uploading: ") for m in logged(mock_output.info))
        mock_output.success.assert_called_once_with("Upload Complete: assets/site.css")

    def test_legacy_upload_without_theme(self, operations, mock_client):
        operations.upload(css_event(), None)

        args = mock_client.update_asset.call_args.args
        assert args[0] is None

    def test_validation_error_lists_messages(
        self, operations, mock_client, mock_output
    ):
        mock_client.update_asset.side_effect = ThemeSyncInvalidRequestError(
            "Invalid request", detail={"asset": ["is invalid", "is too big"]}
        )
        on_done = Mock()

        result = operations.upload(css_event(), 1, on_done)

        assert not result.success
        on_done.assert_called_once()
        mock_output.error.assert_called_once_with(
            "is invalid, is too big in assets/site.css"
        )
        mock_output.success.assert_not_called()

    def test_generic_error_reports_type(self, operations, mock_client, mock_output):
        mock_client.update_asset.side_effect = ThemeSyncNetworkError("timed out")
        on_done = Mock()

        operations.upload(css_event(), 1, on_done)

        on_done.assert_called_once()
        mock_output.error.assert_called_once_with(
            "Shopify API response error: ShopifyNetworkError"
        )

    def test_unmappable_path_still_completes(
        self, operations, mock_client, mock_output
    ):
        on_done = Mock()
        with patch(
            "themesync.sync.operations.make_asset_key",
            side_effect=ValueError("path is on mount 'D:'"),
        ):
            result = operations.upload(css_event(), 1, on_done)

        on_done.assert_called_once_with(result)
        assert result.key is None
        mock_client.update_asset.assert_not_called()
        mock_output.error.assert_called_once()


class TestDestroy:
    """Tests for AssetOperations.destroy."""

    def test_scoped_delete(self, operations, mock_client, mock_output):
        on_done = Mock()

        result = operations.destroy(deleted_event(), 123456, on_done)

        mock_client.delete_asset.assert_called_once_with(
            123456, "snippets/foo.liquid"
        )
        mock_client.update_asset.assert_not_called()
        on_done.assert_called_once_with(result)
        assert result.action == "delete"
        assert any(m.startswith("Removing file: ") for m in logged(mock_output.info))
        assert logged(mock_output.success)[0].startswith("File removed: ")

    def test_legacy_delete(self, operations, mock_client):
        operations.destroy(deleted_event(), None)
        mock_client.delete_asset.assert_called_once_with(None, "snippets/foo.liquid")

    def test_zero_theme_id_is_not_legacy(self, operations, mock_client):
        operations.upload(css_event(), 0)
        operations.destroy(deleted_event(), 0)

        assert mock_client.update_asset.call_args.args[0] == 0
        mock_client.delete_asset.assert_called_once_with(0, "snippets/foo.liquid")

    def test_delete_error(self, operations, mock_client, mock_output):
        mock_client.delete_asset.side_effect = ThemeSyncInvalidRequestError(
            "Invalid request", detail={"asset": ["cannot be deleted"]}
        )
        on_done = Mock()

        result = operations.destroy(deleted_event(), 1, on_done)

        assert not result.success
        on_done.assert_called_once()
        mock_output.error.assert_called_once_with(
            "cannot be deleted in snippets/foo.liquid"
        )


class TestFormatApiError:
    """Tests for format_api_error."""

    def test_invalid_request_without_detail(self):
        error = ThemeSyncInvalidRequestError("Invalid request")
        assert (
            format_api_error(error, "a.css")
            == "Shopify API response error: ShopifyInvalidRequestError"
        )

    def test_detail_without_asset_key(self):
        error = ThemeSyncInvalidRequestError(
            "Invalid request", detail={"key": ["is not allowed"]}
        )
        assert format_api_error(error, "a.css") == "is not allowed in a.css"
