"""
Tests for icon selection and icon URL resolution.
"""
import pytest

from safe_wallet_sdk.safe_apps.icons import (
    MIN_ICON_WIDTH,
    choose_best_icon,
    get_app_logo_url,
    get_origin,
    resolve_icon_url,
)
from safe_wallet_sdk.safe_apps.models import AppManifest, AppManifestIcon


def _icons(*entries):
    return [AppManifestIcon(**entry) for entry in entries]


class TestChooseBestIcon:
    """IconSelector behaviour"""

    def test_prefers_large_icon(self):
        icons = _icons({"src": "small.png", "sizes": "64x64"}, {"src": "large.png", "sizes": "256x256"})
        assert choose_best_icon(icons) == "large.png"

    def test_scalable_icon_wins_regardless_of_position(self):
        icons = _icons({"src": "b.png", "sizes": "512x512"}, {"src": "a.svg", "sizes": "any"})
        assert choose_best_icon(icons) == "a.svg"

    def test_any_before_large(self):
        icons = _icons({"src": "a.svg", "sizes": "any"}, {"src": "b.png", "sizes": "512x512"})
        assert choose_best_icon(icons) == "a.svg"

    def test_svg_type_counts_as_scalable(self):
        icons = _icons(
            {"src": "big.png", "sizes": "512x512"},
            {"src": "logo.svg", "sizes": "48x48", "type": "image/svg+xml"},
        )
        assert choose_best_icon(icons) == "logo.svg"

    def test_fallback_to_first_icon(self):
        icons = _icons({"src": "x.png", "sizes": "32x32"})
        assert choose_best_icon(icons) == "x.png"

    def test_fallback_to_empty_source(self):
        icons = _icons({"src": "", "sizes": "32x32"}, {"src": "y.png", "sizes": "16x16"})
        assert choose_best_icon(icons) == ""

    def test_empty_list(self):
        assert choose_best_icon([]) == ""

    def test_threshold_is_inclusive(self):
        icons = _icons(
            {"src": "127.png", "sizes": "127x127"},
            {"src": "128.png", "sizes": f"{MIN_ICON_WIDTH}x{MIN_ICON_WIDTH}"},
        )
        assert choose_best_icon(icons) == "128.png"

    def test_any_size_token_of_an_icon_may_match(self):
        icons = _icons({"src": "first.png", "sizes": "16x16"}, {"src": "multi.ico", "sizes": "16x16 32x32 192x192"})
        assert choose_best_icon(icons) == "multi.ico"

    def test_malformed_size_token_does_not_abort(self):
        icons = _icons(
            {"src": "broken.png", "sizes": "widexhigh"},
            {"src": "missing.png"},
            {"src": "good.png", "sizes": "192x192"},
        )
        assert choose_best_icon(icons) == "good.png"

    def test_first_large_icon_in_order(self):
        icons = _icons({"src": "a.png", "sizes": "192x192"}, {"src": "b.png", "sizes": "512x512"})
        assert choose_best_icon(icons) == "a.png"


class TestResolveIconUrl:
    """UrlResolver behaviour"""

    def test_bare_relative_reference(self):
        assert resolve_icon_url("https://app.example/sub", "icon.png") == "https://app.example/icon.png"

    def test_root_relative_reference(self):
        assert resolve_icon_url("https://app.example", "/icon.png") == "https://app.example/icon.png"

    def test_absolute_reference_unchanged(self):
        assert resolve_icon_url("https://app.example", "https://cdn.other/icon.png") == "https://cdn.other/icon.png"

    def test_origin_keeps_port(self):
        assert resolve_icon_url("http://localhost:3000/app", "/logo.svg") == "http://localhost:3000/logo.svg"

    def test_origin_of_url_without_host(self):
        with pytest.raises(ValueError, match="Cannot determine origin"):
            get_origin("not a url")


class TestGetAppLogoUrl:

    def test_uses_best_icon(self, manifest_json):
        manifest = AppManifest.model_validate(manifest_json)
        assert get_app_logo_url("https://app.example", manifest) == "https://app.example/icon-256.png"

    def test_uses_icon_path_without_icons(self):
        manifest = AppManifest.model_validate({"name": "x", "description": "y", "iconPath": "logo.svg"})
        assert get_app_logo_url("https://app.example", manifest) == "https://app.example/logo.svg"

    def test_empty_icon_list_falls_back_to_icon_path(self):
        manifest = AppManifest.model_validate(
            {"name": "x", "description": "y", "icons": [], "iconPath": "/i.png"}
        )
        assert get_app_logo_url("https://app.example", manifest) == "https://app.example/i.png"
