"""
Safe Apps module for the Safe Wallet SDK.

Resolves third-party Safe App metadata (name, description, icon and
requested permissions) from the manifest each app publishes.
"""
from .discovery import ManifestDiscovery, discover_manifest_path
from .fetcher import (
    CancelToken, CancellableAdapter, cancellable_session, fetch_app_manifest, fetch_manifest_document,
    get_manifest_url
)
from .icons import choose_best_icon, get_app_logo_url, resolve_icon_url
from .models import AccessControl, AccessPolicyType, AppManifest, AppManifestIcon, ResolvedApp
from .resolver import SafeAppResolver, fetch_safe_app_from_manifest
from .validation import is_app_manifest_valid, validate_app_manifest

__all__ = [
    'SafeAppResolver', 'fetch_safe_app_from_manifest', 'fetch_app_manifest',
    'fetch_manifest_document', 'get_manifest_url', 'CancelToken', 'CancellableAdapter', 'cancellable_session',
    'ManifestDiscovery', 'discover_manifest_path',
    'choose_best_icon', 'get_app_logo_url', 'resolve_icon_url',
    'is_app_manifest_valid', 'validate_app_manifest',
    'AppManifest', 'AppManifestIcon', 'ResolvedApp', 'AccessControl', 'AccessPolicyType',
]
