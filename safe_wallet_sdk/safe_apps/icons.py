"""
Icon selection and icon URL resolution for Safe App manifests.
"""
import urllib.parse
from typing import Optional, Sequence

from .models import AppManifest, AppManifestIcon

MIN_ICON_WIDTH = 128
SVG_MIME_TYPE = "image/svg+xml"
SECURE_SCHEME_PREFIX = "https://"


def _size_tokens(icon: AppManifestIcon) -> list:
    return (icon.sizes or "").split()


def _token_width(token: str) -> Optional[float]:
    """Width component of a `WxH` token, None if it is not a number."""
    width = token.lower().split("x")[0]
    try:
        return float(width)
    except ValueError:
        return None


def is_scalable_icon(icon: AppManifestIcon) -> bool:
    return "any" in _size_tokens(icon) or icon.type == SVG_MIME_TYPE


def choose_best_icon(icons: Sequence[AppManifestIcon]) -> str:
    """
    Pick the most suitable icon source from a manifest's icon list.

    Scalable icons (size `any` or SVG) win outright, then the first icon with
    a width of at least MIN_ICON_WIDTH, then whatever comes first.

    Args:
        icons: Icons in manifest order

    Returns:
        The chosen icon's `src`, or an empty string
    """
    if not icons:
        return ""

    for icon in icons:
        if is_scalable_icon(icon):
            return icon.src

    for icon in icons:
        for token in _size_tokens(icon):
            width = _token_width(token)
            if width is not None and width >= MIN_ICON_WIDTH:
                return icon.src

    return icons[0].src or ""


def get_origin(url: str) -> str:
    """`scheme://host[:port]` of a URL, without path"""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Cannot determine origin of URL '{url}'")
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_icon_url(app_url: str, icon_ref: str) -> str:
    """
    Turn an icon reference from a manifest into an absolute URL.

    The reference can be any of:
    - https://example.com/icon.png (returned as is)
    - /icon.png (joined to the app origin)
    - icon.png (joined to the app origin with a slash)

    Args:
        app_url: Normalized app URL
        icon_ref: Icon reference taken from the manifest

    Returns:
        Absolute icon URL
    """
    if icon_ref.startswith(SECURE_SCHEME_PREFIX):
        return icon_ref

    separator = "" if icon_ref.startswith("/") else "/"
    return f"{get_origin(app_url)}{separator}{icon_ref}"


def get_app_logo_url(app_url: str, manifest: AppManifest) -> str:
    """Absolute URL of the best icon a manifest offers"""
    if manifest.icons:
        icon_ref = choose_best_icon(manifest.icons)
    else:
        icon_ref = manifest.icon_path or ""
    return resolve_icon_url(app_url, icon_ref)
