"""
Tests for manifest link discovery.
"""
import logging

import pytest
import requests
from unittest.mock import MagicMock

from safe_wallet_sdk.exceptions import ManifestDiscoveryError
from safe_wallet_sdk.safe_apps.discovery import (
    ManifestDiscovery,
    discover_manifest_path,
    parse_manifest_href,
)
from tests.conftest import PAGE_WITH_MANIFEST, PAGE_WITHOUT_MANIFEST, TEST_APP_URL


class TestParseManifestHref:

    def test_finds_manifest_link(self):
        assert parse_manifest_href(PAGE_WITH_MANIFEST) == "/app-manifest.json"

    def test_no_manifest_link(self):
        assert parse_manifest_href(PAGE_WITHOUT_MANIFEST) is None

    def test_first_manifest_link_wins(self):
        html = '<link rel="manifest" href="/one.json"><link rel="manifest" href="/two.json">'
        assert parse_manifest_href(html) == "/one.json"

    def test_rel_is_case_insensitive_token_list(self):
        html = '<head><link href="manifest.webmanifest" rel="Preload MANIFEST"/></head>'
        assert parse_manifest_href(html) == "manifest.webmanifest"

    def test_link_without_href_is_ignored(self):
        assert parse_manifest_href('<link rel="manifest">') is None

    def test_parser_failure_is_wrapped(self, monkeypatch):
        def _boom(self, data):
            raise RuntimeError("bad markup")

        monkeypatch.setattr("safe_wallet_sdk.safe_apps.discovery.ManifestLinkParser.feed", _boom)
        with pytest.raises(ManifestDiscoveryError, match="Failed to parse app page"):
            parse_manifest_href("<html>")


class TestDiscoverManifestPath:

    def test_found(self, requests_mock):
        requests_mock.get(f"{TEST_APP_URL}/", text=PAGE_WITH_MANIFEST)

        result = discover_manifest_path(TEST_APP_URL)

        assert result == ManifestDiscovery(found=True, href="/app-manifest.json")

    def test_not_advertised(self, requests_mock):
        requests_mock.get(f"{TEST_APP_URL}/", text=PAGE_WITHOUT_MANIFEST)

        result = discover_manifest_path(TEST_APP_URL)

        assert result == ManifestDiscovery.not_found()
        assert result.href is None

    def test_error_status_is_not_found(self, requests_mock, caplog):
        requests_mock.get(f"{TEST_APP_URL}/", status_code=404, text="nope")
        caplog.set_level(logging.WARNING)

        result = discover_manifest_path(TEST_APP_URL)

        assert not result.found
        assert any("Response status: 404" in msg for msg in caplog.messages)

    def test_network_error_is_not_found(self, requests_mock):
        requests_mock.get(f"{TEST_APP_URL}/", exc=requests.ConnectionError("down"))

        assert discover_manifest_path(TEST_APP_URL) == ManifestDiscovery.not_found()

    def test_repeated_failures_are_logged_once(self, requests_mock):
        requests_mock.get(f"{TEST_APP_URL}/", exc=requests.ConnectionError("down"))
        log = MagicMock()

        discover_manifest_path(TEST_APP_URL, logger_instance=log)
        discover_manifest_path(TEST_APP_URL, logger_instance=log)

        assert log.warning.call_count == 1

    def test_uses_given_session_and_timeout(self):
        response = MagicMock(status_code=200, text=PAGE_WITH_MANIFEST)
        session = MagicMock()
        session.get.return_value = response

        result = discover_manifest_path(TEST_APP_URL, session=session, timeout=3)

        assert result.href == "/app-manifest.json"
        session.get.assert_called_once_with(TEST_APP_URL, timeout=3)
        session.close.assert_not_called()
