"""
Structural validation of fetched Safe App manifests.
"""
from typing import Any, List

from pydantic import ValidationError

from ..exceptions import ManifestInvalidError
from .models import AppManifest

REQUIRED_KEYS = ("name", "description")
ICON_KEYS = ("icons", "iconPath")


def _missing_keys(document: Any) -> List[str]:
    missing = [key for key in REQUIRED_KEYS if key not in document]
    if not any(key in document for key in ICON_KEYS):
        missing.append(" or ".join(ICON_KEYS))
    return missing


def is_app_manifest_valid(document: Any) -> bool:
    """
    Check that a decoded manifest has the minimal required shape.

    It must be a JSON object with `name`, `description` and at least one
    of `icons` or `iconPath`.
    """
    return isinstance(document, dict) and not _missing_keys(document)


def validate_app_manifest(document: Any) -> AppManifest:
    """
    Validate a decoded manifest and build the AppManifest model.

    Raises:
        ManifestInvalidError: If required keys are missing or have the wrong type
    """
    if not isinstance(document, dict):
        raise ManifestInvalidError(
            f"Invalid Safe App manifest: expected a JSON object, got {type(document).__name__}"
        )

    missing = _missing_keys(document)
    if missing:
        raise ManifestInvalidError(
            f"Invalid Safe App manifest: missing {', '.join(missing)}", missing=missing
        )

    try:
        return AppManifest.model_validate(document)
    except ValidationError as e:
        raise ManifestInvalidError(f"Invalid Safe App manifest: {e}") from e
