#!/usr/bin/env python3
"""
Example of resolving a Safe App from its manifest.
"""
import json
import logging
import os
import sys

from safe_wallet_sdk import SafeAppResolver, ManifestFetchError, ManifestInvalidError


def main():
    """
    Demonstrate usage of the SafeAppResolver.

    This example shows how to:
    1. Resolve a Safe App from its URL
    2. Handle unreachable or invalid manifests
    3. Print the payload for the app registry
    """
    logging.basicConfig(level=logging.DEBUG if os.environ.get("DEBUG") else logging.INFO)

    APP_URL = sys.argv[1] if len(sys.argv) > 1 else "https://apps-portal.safe.global/tx-builder/"
    CHAIN_ID = os.environ.get("CHAIN_ID", "1")

    with SafeAppResolver(timeout_ms=int(os.environ.get("SAFE_MANIFEST_TIMEOUT_MS", "5000"))) as resolver:
        try:
            app = resolver.resolve(APP_URL, CHAIN_ID)
        except ManifestFetchError as e:
            reason = "timed out" if e.timed_out else "failed"
            print(f"Manifest fetch {reason}: {e}")
            return
        except ManifestInvalidError as e:
            print(f"Invalid manifest: {e}")
            return

    print(f"Resolved '{app.name}' with icon {app.icon_url}")
    print(json.dumps(app.to_registry_payload(), indent=2))


if __name__ == "__main__":
    main()
