from __future__ import annotations

import logging
import sys
from typing import TextIO

import typer

from vscnix.api_client import MarketplaceClient
from vscnix.code_manager import CodeManager, parse_extension_line, sort_extensions
from vscnix.exceptions import VscnixError
from vscnix.hashing import hash_response
from vscnix.internal_config import (
    HTTP_STREAM_CONNECT_TIMEOUT_SECONDS,
    HTTP_STREAM_READ_TIMEOUT_SECONDS,
    VSIX_FILENAME,
)
from vscnix.manifest import render_entry
from vscnix.marketplace import download_url, extract_metadata, item_page_url
from vscnix.models import ExtensionRef, ManifestEntry

app: typer.Typer = typer.Typer()
logger: logging.Logger = logging.getLogger(__name__)


class ManifestGenerator(object):
    """Resolve the latest marketplace release of each extension and print its Nix entry."""

    client: MarketplaceClient
    code_manager: CodeManager
    output: TextIO | None = None
    base_url: str = ""
    only_updates: bool = False

    def __init__(
        self,
        client: MarketplaceClient | None = None,
        code_manager: CodeManager | None = None,
        output: TextIO | None = None,
        base_url: str = "",
        only_updates: bool = False,
    ) -> None:
        self.client = client or MarketplaceClient()
        self.code_manager = code_manager or CodeManager()
        self.output = output
        self.base_url = base_url
        self.only_updates = only_updates

    def process_extension(
        self, extension: ExtensionRef, assume_latest: bool = False
    ) -> ManifestEntry | None:
        """Fetch, download and hash the latest release of one extension.

        With *assume_latest* an extension without a version counts as being
        on the latest release. Returns ``None`` when only updates are
        requested and the installed version already is the latest one.
        """
        logger.info(f"Fetching data for extension {extension.identifier}...")
        page = self.client.fetch_content(
            item_page_url(extension.identifier, base_url=self.base_url)
        )
        display_name, latest = extract_metadata(page)

        installed = extension.version or (latest if assume_latest else "")
        is_current = installed == latest
        if is_current and self.only_updates:
            logger.info(f"{extension.identifier} is up to date ({latest}), skipping")
            return None

        vsix = VSIX_FILENAME.format(identifier=extension.identifier, version=latest)
        logger.info(f"Downloading {vsix}...")
        url = download_url(
            extension.publisher, extension.name, latest, base_url=self.base_url
        )
        with self.client.fetch(url) as response:
            sha256 = hash_response(response)

        return ManifestEntry(
            display_name=display_name,
            publisher=extension.publisher,
            name=extension.name,
            version=latest,
            sha256=sha256,
            installed_version=None if is_current else installed,
        )

    def run(self, extensions: list[ExtensionRef] | None = None) -> None:
        """Emit one manifest entry per extension, stopping at the first error.

        Without *extensions* the installed ones are listed through the VS Code
        CLI. Explicitly requested extensions may omit their version.
        """
        requested = extensions is not None
        if extensions is None:
            extensions = self.code_manager.list_extensions()
        extensions = sort_extensions(extensions)

        output = self.output or sys.stdout
        for extension in extensions:
            entry = self.process_extension(extension, assume_latest=requested)
            if entry is None:
                continue
            output.write(render_entry(entry))
            output.flush()


@app.command()
def generate(
    extension: list[str] = typer.Option(
        [],
        "--extension",
        "-e",
        help="Process publisher.name[@version] instead of the installed extensions.",
    ),
    code_path: str = "code",
    only_updates: bool = False,
    marketplace_url: str = "",
    timeout: int = HTTP_STREAM_READ_TIMEOUT_SECONDS,
    log_level: str = "info",
) -> None:
    """Print Nix manifest entries for the latest version of every installed extension."""
    logging.basicConfig(
        level=(getattr(logging, log_level.upper())),
        format="%(relativeCreated)d [%(levelname)s] %(message)s",
    )
    generator = ManifestGenerator(
        client=MarketplaceClient(
            timeout=(HTTP_STREAM_CONNECT_TIMEOUT_SECONDS, timeout),
        ),
        code_manager=CodeManager(code_path=code_path),
        base_url=marketplace_url,
        only_updates=only_updates,
    )
    requested = [parse_extension_line(item) for item in extension] or None
    try:
        generator.run(requested)
    except VscnixError as e:
        logger.error(f"Error: {e}")
        raise typer.Exit(code=1) from e


def main() -> None:
    app()


if __name__ == "__main__":
    main()
