from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtensionRef:
    identifier: str
    publisher: str
    name: str
    version: str = ""


@dataclass(frozen=True)
class VersionInfo:
    version: str


@dataclass(frozen=True)
class ManifestEntry:
    display_name: str
    publisher: str
    name: str
    version: str
    sha256: str
    # only set when the installed version differs from the latest one
    installed_version: str | None = None

    @property
    def is_update(self) -> bool:
        return self.installed_version is not None
