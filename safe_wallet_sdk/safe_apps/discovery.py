"""
Best-effort discovery of a manifest link advertised by a Safe App page.

Most apps do not advertise one, so a miss is an expected outcome and is
returned as a result rather than raised.
"""
import logging
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Optional

import requests

from .._rate_limited_log import rate_limited_log
from ..exceptions import ManifestDiscoveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestDiscovery:
    """Outcome of looking for `<link rel="manifest">` on an app page"""
    found: bool
    href: Optional[str] = None

    @classmethod
    def from_href(cls, href: str) -> "ManifestDiscovery":
        return cls(found=True, href=href)

    @classmethod
    def not_found(cls) -> "ManifestDiscovery":
        return cls(found=False)


class ManifestLinkParser(HTMLParser):
    """Collects the href of the first `<link rel="manifest">` element."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.manifest_href: Optional[str] = None

    def handle_starttag(self, tag, attrs):
        if self.manifest_href is not None or tag != "link":
            return
        attributes = dict(attrs)
        rel_tokens = (attributes.get("rel") or "").lower().split()
        href = attributes.get("href")
        if "manifest" in rel_tokens and href:
            self.manifest_href = href.strip()

    handle_startendtag = handle_starttag


def parse_manifest_href(html: str) -> Optional[str]:
    """
    Extract the manifest href from an HTML document.

    Raises:
        ManifestDiscoveryError: If the document cannot be parsed
    """
    parser = ManifestLinkParser()
    try:
        parser.feed(html)
        parser.close()
    except Exception as e:
        raise ManifestDiscoveryError(f"Failed to parse app page: {e}") from e
    return parser.manifest_href or None


def _fetch_manifest_href(url: str, session: requests.Session, timeout: Optional[float]) -> Optional[str]:
    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ManifestDiscoveryError(f"Failed to fetch app page {url}: {e}") from e

    if not 200 <= response.status_code < 300:
        raise ManifestDiscoveryError(f"Response status: {response.status_code}")

    return parse_manifest_href(response.text)


def discover_manifest_path(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    logger_instance: Optional[logging.Logger] = None
) -> ManifestDiscovery:
    """
    Look for a manifest link on the app page at `url`.

    Never raises: network errors, bad statuses and unparsable pages are
    logged and reported as not found.

    Args:
        url: Normalized app URL
        session: HTTP session to use (a plain one is created if omitted)
        timeout: Request timeout in seconds, None waits indefinitely
        logger_instance: Logger for discovery failures

    Returns:
        ManifestDiscovery result
    """
    log = logger_instance or logger
    http = session or requests.Session()

    try:
        href = _fetch_manifest_href(url, http, timeout)
    except ManifestDiscoveryError as e:
        rate_limited_log(f"Manifest discovery failed for {url}: {e}", level="warning", logger_instance=log)
        return ManifestDiscovery.not_found()
    finally:
        if session is None:
            http.close()

    if href is None:
        log.debug(f"No manifest link advertised by {url}")
        return ManifestDiscovery.not_found()

    log.debug(f"Discovered manifest link {href} on {url}")
    return ManifestDiscovery.from_href(href)
