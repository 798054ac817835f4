from __future__ import annotations

import os
import platform
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


_vscnix_version = _get_package_version("vscnix")

DEFAULT_USER_AGENT = (
    f"vscnix/{_vscnix_version}"
    f" ({platform.system()}; {platform.machine()}; compatible)"
)

DEFAULT_MARKETPLACE_URL = "https://marketplace.visualstudio.com"
MARKETPLACE_URL_ENV = "VSCNIX_MARKETPLACE_URL"

ITEM_PAGE_PATH = "/items?itemName={identifier}"
DOWNLOAD_PATH = (
    "/_apis/public/gallery/publishers/{publisher}"
    "/vsextensions/{name}/{version}/vspackage"
)
VSIX_FILENAME = "{identifier}-{version}.vsix"

# CSS selectors on the marketplace item page
DISPLAY_NAME_SELECTOR = ".ux-item-name"
VERSION_METADATA_SELECTOR = ".rhs-content .jiContent"

HTTP_STREAM_CONNECT_TIMEOUT_SECONDS = 10
HTTP_STREAM_READ_TIMEOUT_SECONDS = 120

# added on top of the server supplied Retry-After interval
RATE_LIMIT_MARGIN_SECONDS = 5
# longer delays are treated as a malformed header
RETRY_AFTER_MAX_SECONDS = 24 * 60 * 60

DOWNLOAD_CHUNK_SIZE = 1024 * 8

LIST_EXTENSIONS_ARGS = ["--list-extensions", "--show-versions"]


def resolve_marketplace_url() -> str:
    """Return the marketplace base URL, honouring ``VSCNIX_MARKETPLACE_URL``."""
    explicit_url = os.environ.get(MARKETPLACE_URL_ENV, "").strip()
    return (explicit_url or DEFAULT_MARKETPLACE_URL).rstrip("/")
