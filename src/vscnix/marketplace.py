from __future__ import annotations

import json
from typing import Any

from bs4 import BeautifulSoup

from vscnix.exceptions import ParseError
from vscnix.internal_config import (
    DISPLAY_NAME_SELECTOR,
    DOWNLOAD_PATH,
    ITEM_PAGE_PATH,
    VERSION_METADATA_SELECTOR,
    resolve_marketplace_url,
)
from vscnix.models import VersionInfo


def item_page_url(identifier: str, base_url: str = "") -> str:
    base = (base_url or resolve_marketplace_url()).rstrip("/")
    return base + ITEM_PAGE_PATH.format(identifier=identifier.lower())


def download_url(publisher: str, name: str, version: str, base_url: str = "") -> str:
    base = (base_url or resolve_marketplace_url()).rstrip("/")
    return base + DOWNLOAD_PATH.format(
        publisher=publisher.lower(),
        name=name.lower(),
        version=version,
    )


def first_version(payload: Any) -> VersionInfo:
    """Return the first record of the ``Versions`` list in the page metadata.

    The feed lists the newest release first. Only that record is decoded,
    the remaining ones are not looked at.
    """
    if not isinstance(payload, dict):
        raise ParseError("Extension metadata is not a JSON object")

    versions = payload.get("Versions")
    if not isinstance(versions, list) or not versions:
        raise ParseError("Extension metadata lists no versions")

    item = versions[0]
    version = item.get("version") if isinstance(item, dict) else None
    if not isinstance(version, str) or not version:
        raise ParseError(f"Invalid version record in metadata: {item!r}")
    return VersionInfo(version=version)


def extract_metadata(html: str | bytes) -> tuple[str, str]:
    """Return the display name and latest version from an item page."""
    doc = BeautifulSoup(html, "html.parser")

    name_node = doc.select_one(DISPLAY_NAME_SELECTOR)
    display_name = name_node.get_text().strip() if name_node is not None else ""

    metadata_node = doc.select_one(VERSION_METADATA_SELECTOR)
    if metadata_node is None:
        raise ParseError("Version metadata not found on extension page")

    try:
        payload = json.loads(metadata_node.get_text())
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed version metadata: {e}") from e

    return display_name, first_version(payload).version
