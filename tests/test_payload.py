"""Tests for binary detection and asset payloads."""

import base64
from unittest.mock import patch

import pytest

from themesync.sync.payload import build_asset_payload
from themesync.utils import format_preview_url, is_binary_content, is_theme_id

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"


class TestIsBinaryContent:
    """Tests for the binary content heuristic."""

    def test_plain_text(self):
        assert is_binary_content(b"body { color: red; }\n") is False

    def test_utf8_text(self):
        assert is_binary_content("Grüße {{ shop.name }}".encode()) is False

    def test_empty_is_text(self):
        assert is_binary_content(b"") is False

    def test_null_byte_is_binary(self):
        assert is_binary_content(b"abc\x00def") is True

    def test_png_is_binary(self):
        assert is_binary_content(PNG_BYTES) is True

    def test_jpeg_is_binary(self):
        assert is_binary_content(b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01") is True

    def test_detector_sees_leading_bytes_only(self):
        data = b"a" * 4096
        with patch("themesync.utils.is_binary_string", return_value=True) as detector:
            assert is_binary_content(data) is True
        detector.assert_called_once_with(data[:1024])

    def test_invalid_utf8_is_binary(self):
        assert is_binary_content(b"\xff\xfe\xfd\xfc plain") is True

    def test_extension_is_irrelevant(self):
        """Test that only content is inspected (no path argument at all)."""
        assert is_binary_content(b"{% comment %}x{% endcomment %}") is False


class TestBuildAssetPayload:
    """Tests for build_asset_payload."""

    def test_text_sets_value_only(self):
        payload = build_asset_payload("assets/site.css", b"a { }")
        assert payload == {"asset": {"key": "assets/site.css", "value": "a { }"}}
        assert "attachment" not in payload["asset"]

    def test_binary_sets_attachment_only(self):
        payload = build_asset_payload("assets/logo.png", PNG_BYTES)
        asset = payload["asset"]
        assert asset["key"] == "assets/logo.png"
        assert "value" not in asset
        assert base64.b64decode(asset["attachment"]) == PNG_BYTES

    def test_null_byte_content_uses_attachment(self):
        payload = build_asset_payload("assets/data.bin", b"ab\x00cd")
        assert set(payload["asset"]) == {"key", "attachment"}

    def test_empty_file_is_text(self):
        payload = build_asset_payload("snippets/empty.liquid", b"")
        assert payload["asset"]["value"] == ""

    def test_none_contents_raises(self):
        with pytest.raises(ValueError, match="No content"):
            build_asset_payload("assets/site.css", None)


class TestThemeIdHelpers:
    """Tests for theme id helpers."""

    def test_numeric_string(self):
        assert is_theme_id("123456") is True

    def test_int(self):
        assert is_theme_id(123456) is True

    def test_non_numeric(self):
        assert is_theme_id("abc") is False
        assert is_theme_id("") is False

    def test_bool_is_not_an_id(self):
        assert is_theme_id(True) is False

    def test_non_ascii_digits_are_rejected(self):
        assert is_theme_id("\u00b2") is False
        assert is_theme_id("\u0661\u0662\u0663") is False
        assert is_theme_id(" 42 ") is True

    def test_preview_url(self):
        assert (
            format_preview_url("shop.myshopify.com", 42)
            == "https://shop.myshopify.com/?preview_theme_id=42"
        )
