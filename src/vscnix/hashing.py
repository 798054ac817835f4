from __future__ import annotations

import base64
import hashlib
from typing import Iterable

import requests

from vscnix.exceptions import HashStreamError
from vscnix.internal_config import DOWNLOAD_CHUNK_SIZE


def hash_artifact(chunks: Iterable[bytes]) -> str:
    """Return the base64 encoded SHA-256 digest of a byte stream."""
    digest = hashlib.sha256()
    try:
        for chunk in chunks:
            if chunk:
                digest.update(chunk)
    except (requests.RequestException, OSError) as e:
        raise HashStreamError(f"Reading artifact failed: {e}") from e
    return base64.b64encode(digest.digest()).decode("ascii")


def hash_response(response: requests.Response) -> str:
    return hash_artifact(response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE))
