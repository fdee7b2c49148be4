"""
Safe Wallet SDK.

Transaction decode classification and Safe App manifest resolution.
"""
from .version import __version__
from .config import SafeConfig
from .exceptions import (
    SafeWalletError, ManifestError, ManifestDiscoveryError, ManifestFetchError,
    ManifestInvalidError, TxDetailsError
)
from .analytics import AnalyticsEvent, AnalyticsSink, track_event, track_details_toggle
from .safe_apps import (
    SafeAppResolver, fetch_safe_app_from_manifest, AppManifest, AppManifestIcon, ResolvedApp
)
from .transactions import (
    classify_transaction, DecodePresentationModel, TxDetailsClient, Operation,
    RawTransaction, DecodedCallData, TxDetails, TxDetailsState
)

__all__ = [
    "__version__",
    "SafeConfig",
    "SafeWalletError",
    "ManifestError",
    "ManifestDiscoveryError",
    "ManifestFetchError",
    "ManifestInvalidError",
    "TxDetailsError",
    "AnalyticsEvent",
    "AnalyticsSink",
    "track_event",
    "track_details_toggle",
    "SafeAppResolver",
    "fetch_safe_app_from_manifest",
    "AppManifest",
    "AppManifestIcon",
    "ResolvedApp",
    "classify_transaction",
    "DecodePresentationModel",
    "TxDetailsClient",
    "Operation",
    "RawTransaction",
    "DecodedCallData",
    "TxDetails",
    "TxDetailsState",
]
