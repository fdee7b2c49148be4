"""
Configuration for the Safe Wallet SDK.

Every setting can be passed explicitly; otherwise it is read from the
environment and finally falls back to a built-in default.
"""
import os
import urllib.parse
from typing import Optional

DEFAULT_GATEWAY_URL = "https://safe-client.safe.global"
DEFAULT_MANIFEST_TIMEOUT_MS = 5000
DEFAULT_HTTP_TIMEOUT = 10

LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


class SafeConfig:
    """Environment-driven SDK settings."""

    GATEWAY_URL_ENV = "SAFE_CLIENT_GATEWAY_URL"
    MANIFEST_TIMEOUT_ENV = "SAFE_MANIFEST_TIMEOUT_MS"
    HTTP_TIMEOUT_ENV = "SAFE_HTTP_TIMEOUT"
    INSECURE_GW_ENV = "SAFE_INSECURE_GW"

    @classmethod
    def get_gateway_url(cls, override: Optional[str] = None) -> str:
        """
        Get the client gateway base URL.

        Args:
            override: Explicit URL, takes precedence over the environment

        Returns:
            Gateway URL without a trailing slash

        Raises:
            ValueError: If the URL is not HTTPS and not local, unless
                SAFE_INSECURE_GW=1 is set
        """
        url = override or os.environ.get(cls.GATEWAY_URL_ENV) or DEFAULT_GATEWAY_URL
        cls.validate_gateway_url(url)
        return url.rstrip("/")

    @classmethod
    def validate_gateway_url(cls, url: str) -> None:
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid gateway URL '{url}'")

        host = parsed.hostname or ""
        is_local = host in LOCAL_HOSTS
        if parsed.scheme != "https" and not is_local and not cls.allow_insecure():
            raise ValueError(
                f"Gateway URL must use HTTPS for security (got: {parsed.scheme}://). "
                f"Set {cls.INSECURE_GW_ENV}=1 to allow HTTP for development."
            )

    @classmethod
    def allow_insecure(cls) -> bool:
        return os.environ.get(cls.INSECURE_GW_ENV) == "1"

    @classmethod
    def get_manifest_timeout_ms(cls, override: Optional[int] = None) -> int:
        """Hard timeout for manifest fetches, in milliseconds."""
        if override is not None:
            return cls._positive(override, "manifest timeout")
        return cls._positive(
            os.environ.get(cls.MANIFEST_TIMEOUT_ENV, DEFAULT_MANIFEST_TIMEOUT_MS),
            cls.MANIFEST_TIMEOUT_ENV
        )

    @classmethod
    def get_http_timeout(cls, override: Optional[float] = None) -> float:
        """Timeout in seconds for gateway and page requests."""
        if override is not None:
            return cls._positive(override, "HTTP timeout", cast=float)
        return cls._positive(
            os.environ.get(cls.HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT),
            cls.HTTP_TIMEOUT_ENV,
            cast=float
        )

    @staticmethod
    def _positive(value, name: str, cast=int):
        try:
            result = cast(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a number, got: {value!r}")
        if result <= 0:
            raise ValueError(f"{name} must be positive, got: {value!r}")
        return result
