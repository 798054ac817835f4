from __future__ import annotations

import json

from vscnix.models import ManifestEntry

CURRENT_TEMPLATE = """{{
  # {display_name}
  publisher = "{publisher}";
  name = "{name}";
  version = "{version}";
  sha256 = "{sha256}";
}}
"""

UPDATE_TEMPLATE = """{{
  # {display_name}
  publisher = "{publisher}";
  name = "{name}";
  version = "{version}"; # From {installed_version}
  sha256 = "{sha256}";
}}
"""


def render_current(entry: ManifestEntry) -> str:
    return CURRENT_TEMPLATE.format(
        display_name=entry.display_name,
        publisher=entry.publisher,
        name=entry.name,
        version=entry.version,
        sha256=entry.sha256,
    )


def render_update(entry: ManifestEntry) -> str:
    return UPDATE_TEMPLATE.format(
        display_name=entry.display_name,
        publisher=entry.publisher,
        name=entry.name,
        version=entry.version,
        installed_version=json.dumps(entry.installed_version or ""),
        sha256=entry.sha256,
    )


def render_entry(entry: ManifestEntry) -> str:
    """Render *entry* with the update template when it is outdated."""
    return render_update(entry) if entry.is_update else render_current(entry)
