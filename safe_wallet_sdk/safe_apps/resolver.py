"""
SafeAppResolver - builds a Safe App record from a third-party app URL.
"""
import logging
import random
from typing import Callable, Optional, Union

import requests

from ..config import SafeConfig
from ..exceptions import ManifestFetchError, ManifestInvalidError
from .discovery import discover_manifest_path
from .fetcher import cancellable_session, fetch_manifest_document, get_manifest_url, normalize_app_url
from .icons import get_app_logo_url
from .models import ResolvedApp
from .validation import validate_app_manifest

# The registry stores ids in a positive integer column
MIN_APP_ID = 10**6
MAX_APP_ID = 10**9 + 10**6


def generate_app_id() -> int:
    """
    Placeholder id for a freshly resolved app.

    Not unique; the registry assigns the definitive id and callers must
    de-duplicate against existing records.
    """
    return random.randint(MIN_APP_ID, MAX_APP_ID)


class SafeAppResolver:
    """
    Resolves Safe App metadata from the app's own manifest.

    Resolution runs these steps in order:
    1. Look for a `<link rel="manifest">` on the app page (best effort)
    2. Fetch the manifest under a hard timeout
    3. Validate it and pick the best icon

    Each call uses its own cancellation token and timer, so a single resolver
    can be shared between threads as long as its session is.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_ms: Optional[int] = None,
        discovery_timeout: Optional[float] = None,
        id_generator: Callable[[], int] = generate_app_id,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the resolver

        Args:
            session: HTTP session to reuse (a new cancellable one is created
                if omitted)
            timeout_ms: Manifest fetch deadline in milliseconds
                (defaults to SAFE_MANIFEST_TIMEOUT_MS or 5000)
            discovery_timeout: Timeout in seconds for fetching the app page,
                None waits indefinitely
            id_generator: Factory for placeholder app ids
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If timeout_ms is not a positive number
        """
        self.timeout_ms = SafeConfig.get_manifest_timeout_ms(timeout_ms)
        self.discovery_timeout = discovery_timeout
        self.id_generator = id_generator
        self.logger = logger or logging.getLogger(__name__)
        self._owns_session = session is None
        self.session = session or cancellable_session()

    def resolve(self, app_url: str, chain_id: Union[str, int]) -> ResolvedApp:
        """
        Resolve the app at `app_url` for the given chain

        Args:
            app_url: URL the app is served from
            chain_id: Chain the app is being added for

        Returns:
            ResolvedApp with a placeholder id

        Raises:
            ManifestFetchError: If the manifest cannot be retrieved or times out
            ManifestInvalidError: If the manifest lacks required fields
        """
        normalized_url = normalize_app_url(app_url)

        discovery = discover_manifest_path(
            normalized_url,
            session=self.session,
            timeout=self.discovery_timeout,
            logger_instance=self.logger
        )
        manifest_url = get_manifest_url(app_url, discovery)
        self.logger.debug(f"Fetching manifest for {normalized_url} from {manifest_url}")

        try:
            document = fetch_manifest_document(manifest_url, timeout_ms=self.timeout_ms, session=self.session)
        except ManifestFetchError as e:
            self.logger.error(f"Manifest fetch failed for {normalized_url}: {e}")
            raise

        try:
            manifest = validate_app_manifest(document)
        except ManifestInvalidError as e:
            self.logger.error(f"Invalid manifest at {manifest_url}: {e}")
            raise

        icon_url = get_app_logo_url(normalized_url, manifest)

        app = ResolvedApp(
            id=self.id_generator(),
            url=normalized_url,
            name=manifest.name,
            description=manifest.description,
            chain_ids=[str(chain_id)],
            icon_url=icon_url,
            safe_apps_permissions=manifest.safe_apps_permissions or []
        )
        self.logger.info(f"Resolved Safe App '{app.name}' from {normalized_url}")
        return app

    def close(self) -> None:
        """Close the HTTP session if the resolver created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "SafeAppResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def fetch_safe_app_from_manifest(
    app_url: str,
    chain_id: Union[str, int],
    timeout_ms: Optional[int] = None,
    session: Optional[requests.Session] = None
) -> ResolvedApp:
    """One-shot resolution with a throwaway resolver, see SafeAppResolver.resolve"""
    with SafeAppResolver(session=session, timeout_ms=timeout_ms) as resolver:
        return resolver.resolve(app_url, chain_id)
