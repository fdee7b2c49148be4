"""
Time-bounded retrieval of Safe App manifest documents.

A lot of apps are hosted on IPFS gateways that never time out on their own,
so every manifest fetch is bounded by an explicit timer that cancels the
request when it fires.
"""
import json
import logging
import socket
import threading
import urllib.parse
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import requests
from requests.adapters import HTTPAdapter

from ..config import SafeConfig
from ..exceptions import ManifestFetchError
from .discovery import ManifestDiscovery, discover_manifest_path

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"
CHUNK_SIZE = 8192


class CancelToken:
    """
    Per-request cancellation token driven by an optional timer.

    Resources registered with the token are closed as soon as it is
    cancelled, which aborts any read blocked on them.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._resources: List[Any] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def armed(self) -> bool:
        return self._timer is not None

    def arm(self, timeout: float) -> None:
        """Cancel the token after `timeout` seconds unless released first."""
        with self._lock:
            if self._timer is not None:
                raise RuntimeError("CancelToken is already armed")
            self._timer = threading.Timer(timeout, self.cancel)
            self._timer.daemon = True
            self._timer.start()

    def register(self, resource: Any) -> None:
        """Close `resource` on cancellation (immediately if already cancelled)."""
        with self._lock:
            if not self.cancelled:
                self._resources.append(resource)
                return
        resource.close()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            resources, self._resources = self._resources, []
        for resource in resources:
            try:
                resource.close()
            except Exception as e:
                logger.debug(f"Error closing cancelled resource: {e}")

    def release(self) -> None:
        """Stop the timer and forget registered resources."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._resources = []

    def __enter__(self) -> "CancelToken":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


_active = threading.local()


@contextmanager
def bind_token(token: CancelToken) -> Iterator[CancelToken]:
    """Make `token` the one connections opened by this thread register with."""
    previous = getattr(_active, "token", None)
    _active.token = token
    try:
        yield token
    finally:
        _active.token = previous


class _ConnectionAbort:
    """Aborts an in-flight connection, waking up any read blocked on it."""

    def __init__(self, conn):
        self.conn = conn

    def close(self) -> None:
        sock = getattr(self.conn, "sock", None)
        try:
            if sock is not None:
                sock.shutdown(socket.SHUT_RDWR)
        finally:
            self.conn.close()


def _register_connection(conn) -> None:
    token = getattr(_active, "token", None)
    if token is not None:
        token.register(_ConnectionAbort(conn))


def _cancellable_pool(pool_cls):
    class CancellableConnection(pool_cls.ConnectionCls):
        def connect(self):
            super().connect()
            _register_connection(self)

        def request(self, *args, **kwargs):
            _register_connection(self)
            return super().request(*args, **kwargs)

    return type(pool_cls.__name__, (pool_cls,), {"ConnectionCls": CancellableConnection})


def _make_cancellable(manager):
    if not getattr(manager, "cancellable", False):
        manager.pool_classes_by_scheme = {
            scheme: _cancellable_pool(pool_cls)
            for scheme, pool_cls in manager.pool_classes_by_scheme.items()
        }
        manager.cancellable = True
    return manager


class CancellableAdapter(HTTPAdapter):
    """
    HTTPAdapter whose connections can be aborted by a CancelToken.

    Every connection used while a token is bound (see `bind_token`) is
    registered with it, so the token can abort a request that is still
    connecting or waiting for headers, not just a response being read.
    """

    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        _make_cancellable(self.poolmanager)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        return _make_cancellable(super().proxy_manager_for(proxy, **proxy_kwargs))


def cancellable_session() -> requests.Session:
    """A session whose requests honour the bound CancelToken"""
    session = requests.Session()
    session.mount("http://", CancellableAdapter())
    session.mount("https://", CancellableAdapter())
    return session


def normalize_app_url(app_url: str) -> str:
    """Strip a single trailing slash from an app URL"""
    return app_url[:-1] if app_url.endswith("/") else app_url


def get_manifest_url(app_url: str, discovery: ManifestDiscovery) -> str:
    """
    Compute where the manifest should be fetched from.

    A discovered href is resolved against the app origin, so both `/m.json`
    and `m.json` land at the origin root and absolute hrefs are kept. Without
    a discovered link the conventional `<app>/manifest.json` is used.
    """
    normalized_url = normalize_app_url(app_url)
    if not discovery.found or not discovery.href:
        return f"{normalized_url}/{MANIFEST_FILENAME}"

    parsed = urllib.parse.urlsplit(app_url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    return urllib.parse.urljoin(f"{origin}/", discovery.href)


def _read_body(response: requests.Response, token: CancelToken, url: str) -> bytes:
    chunks = []
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if token.cancelled:
                break
            chunks.append(chunk)
    except Exception as e:
        if token.cancelled:
            raise ManifestFetchError(
                f"Timed out fetching manifest from {url}", url=url, timed_out=True
            ) from e
        if isinstance(e, requests.RequestException):
            raise ManifestFetchError(f"Failed to fetch manifest from {url}: {e}", url=url) from e
        raise

    if token.cancelled:
        raise ManifestFetchError(f"Timed out fetching manifest from {url}", url=url, timed_out=True)
    return b"".join(chunks)


def fetch_manifest_document(
    manifest_url: str,
    timeout_ms: Optional[int] = None,
    session: Optional[requests.Session] = None,
    token: Optional[CancelToken] = None
) -> Any:
    """
    Fetch and parse a manifest document under a hard timeout.

    Args:
        manifest_url: Absolute manifest URL
        timeout_ms: Overall deadline in milliseconds (SAFE_MANIFEST_TIMEOUT_MS or 5000)
        session: HTTP session to use. Only sessions with a CancellableAdapter
            mounted can be aborted before the response headers arrive; one
            is created if omitted
        token: Cancellation token for this request, created if omitted

    Returns:
        The decoded JSON document, not yet validated

    Raises:
        ManifestFetchError: On network failure, non-2xx status, timeout or
            a body that is not JSON
    """
    timeout_s = SafeConfig.get_manifest_timeout_ms(timeout_ms) / 1000
    http = session or cancellable_session()
    token = token or CancelToken()
    token.arm(timeout_s)

    try:
        try:
            with bind_token(token):
                response = http.get(manifest_url, stream=True, timeout=timeout_s)
        except requests.RequestException as e:
            if token.cancelled or isinstance(e, requests.Timeout):
                raise ManifestFetchError(
                    f"Timed out fetching manifest from {manifest_url}", url=manifest_url, timed_out=True
                ) from e
            raise ManifestFetchError(
                f"Failed to fetch manifest from {manifest_url}: {e}", url=manifest_url
            ) from e

        token.register(response)
        try:
            if token.cancelled:
                raise ManifestFetchError(
                    f"Timed out fetching manifest from {manifest_url}", url=manifest_url, timed_out=True
                )
            if not 200 <= response.status_code < 300:
                raise ManifestFetchError(
                    f"Failed to fetch manifest from {manifest_url}",
                    url=manifest_url,
                    status_code=response.status_code
                )
            body = _read_body(response, token, manifest_url)
        finally:
            response.close()
    finally:
        token.release()
        if session is None:
            http.close()

    try:
        return json.loads(body)
    except ValueError as e:
        raise ManifestFetchError(
            f"Manifest at {manifest_url} is not valid JSON: {e}", url=manifest_url
        ) from e


def fetch_app_manifest(
    app_url: str,
    timeout_ms: Optional[int] = None,
    session: Optional[requests.Session] = None,
    discovery_timeout: Optional[float] = None
) -> Any:
    """
    Locate and fetch the manifest of the app at `app_url`.

    Discovery runs first and its outcome decides the manifest URL; the
    manifest fetch itself is bounded by `timeout_ms`.

    Raises:
        ManifestFetchError: If the manifest cannot be retrieved in time
    """
    normalized_url = normalize_app_url(app_url)
    discovery = discover_manifest_path(normalized_url, session=session, timeout=discovery_timeout)
    manifest_url = get_manifest_url(app_url, discovery)
    logger.debug(f"Fetching manifest for {normalized_url} from {manifest_url}")
    return fetch_manifest_document(manifest_url, timeout_ms=timeout_ms, session=session)
