"""
Exceptions for the Safe Wallet SDK.
"""
from typing import Optional, Sequence


class SafeWalletError(Exception):
    """Base exception for all SDK errors."""
    pass


class ManifestError(SafeWalletError):
    """Base exception for Safe App manifest resolution errors."""
    pass


class ManifestDiscoveryError(ManifestError):
    """
    Raised internally when the app page cannot be fetched or parsed.

    Discovery is best-effort: this error is caught inside the discovery step
    and never reaches callers of the resolver.
    """
    pass


class ManifestFetchError(ManifestError):
    """
    Raised when the manifest document could not be obtained.

    Network failures, non-2xx responses and timeouts all end up here.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        timed_out: bool = False
    ):
        self.url = url
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__(message)


class ManifestInvalidError(ManifestError):
    """Raised when the fetched manifest does not have the required shape."""

    def __init__(self, message: str, missing: Optional[Sequence[str]] = None):
        self.missing = list(missing or [])
        super().__init__(message)


class TxDetailsError(SafeWalletError):
    """Raised when transaction details cannot be retrieved from the gateway."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
