from __future__ import annotations

import logging
import subprocess
from typing import Callable, Iterable

from vscnix.exceptions import ProcessInvocationError
from vscnix.internal_config import LIST_EXTENSIONS_ARGS
from vscnix.models import ExtensionRef

logger: logging.Logger = logging.getLogger(__name__)

RunCommand = Callable[..., subprocess.CompletedProcess[str]]


def parse_extension_line(line: str) -> ExtensionRef:
    """Parse a ``publisher.name@version`` token.

    A missing ``@`` leaves the version empty and a missing ``.`` leaves the
    name empty; neither is an error here.
    """
    identifier, _, version = line.strip().partition("@")
    publisher, _, name = identifier.partition(".")
    return ExtensionRef(
        identifier=identifier.lower(),
        publisher=publisher.lower(),
        name=name.lower(),
        version=version,
    )


def parse_extension_list(output: str) -> list[ExtensionRef]:
    return [parse_extension_line(line) for line in output.splitlines() if line.strip()]


def sort_extensions(extensions: Iterable[ExtensionRef]) -> list[ExtensionRef]:
    return sorted(extensions, key=lambda extension: extension.name)


class CodeManager(object):
    """Query the VS Code CLI for installed extensions."""

    code_binary: str
    run_command: RunCommand

    def __init__(
        self, code_path: str = "code", run_command: RunCommand = subprocess.run
    ) -> None:
        self.code_binary = code_path
        self.run_command = run_command

    def list_extensions(self) -> list[ExtensionRef]:
        """Return all installed extensions sorted by name."""
        cmd = [self.code_binary, *LIST_EXTENSIONS_ARGS]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            output = self.run_command(
                cmd,
                capture_output=True,
                check=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ProcessInvocationError(
                f"{self.code_binary} exited with status {e.returncode}: {stderr}"
            ) from e
        except OSError as e:
            raise ProcessInvocationError(
                f"Could not run {self.code_binary}: {e}"
            ) from e

        return sort_extensions(parse_extension_list(output.stdout))
