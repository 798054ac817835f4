from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

from vscnix import extension_manager
from vscnix.exceptions import ProcessInvocationError
from vscnix.models import ExtensionRef, ManifestEntry

runner = CliRunner()


class _GeneratorStub:
    instances: list[_GeneratorStub] = []

    def __init__(self, client, code_manager, base_url: str, only_updates: bool) -> None:
        self.client = client
        self.code_manager = code_manager
        self.base_url = base_url
        self.only_updates = only_updates
        self.requested: list[ExtensionRef] | None = None
        _GeneratorStub.instances.append(self)

    def run(self, extensions: list[ExtensionRef] | None = None) -> None:
        self.requested = extensions


@pytest.fixture(autouse=True)
def _reset_stub() -> None:
    _GeneratorStub.instances = []


def test_cli_help_shows_core_options() -> None:
    result = runner.invoke(extension_manager.app, ["--help"])

    assert result.exit_code == 0
    for option in (
        "--extension",
        "--code-path",
        "--only-updates",
        "--marketplace-url",
        "--log-level",
    ):
        assert option in result.output


def test_cli_wires_options_into_generator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extension_manager, "ManifestGenerator", _GeneratorStub)

    result = runner.invoke(
        extension_manager.app,
        [
            "--code-path",
            "/usr/bin/codium",
            "--only-updates",
            "--marketplace-url",
            "https://mirror.test",
            "--timeout",
            "7",
        ],
    )

    assert result.exit_code == 0
    stub = _GeneratorStub.instances[0]
    assert stub.code_manager.code_binary == "/usr/bin/codium"
    assert stub.client.timeout == (10, 7)
    assert stub.base_url == "https://mirror.test"
    assert stub.only_updates is True
    assert stub.requested is None


def test_cli_parses_explicit_extensions(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(extension_manager, "ManifestGenerator", _GeneratorStub)

    result = runner.invoke(
        extension_manager.app, ["-e", "Golang.Go@0.40.0", "--extension", "pub.ext"]
    )

    assert result.exit_code == 0
    assert _GeneratorStub.instances[0].requested == [
        ExtensionRef("golang.go", "golang", "go", "0.40.0"),
        ExtensionRef("pub.ext", "pub", "ext", ""),
    ]


def test_cli_prints_entries_to_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    def _process(
        self, extension: ExtensionRef, assume_latest: bool = False
    ) -> ManifestEntry:
        return ManifestEntry(
            display_name="Go",
            publisher=extension.publisher,
            name=extension.name,
            version="0.41.0",
            sha256="abc=",
            installed_version=extension.version,
        )

    monkeypatch.setattr(
        extension_manager.ManifestGenerator, "process_extension", _process
    )

    result = runner.invoke(extension_manager.app, ["-e", "golang.go@0.40.0"])

    assert result.exit_code == 0
    assert 'version = "0.41.0"; # From "0.40.0"' in result.stdout


def test_cli_exits_non_zero_with_single_error_line(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def _fail(self) -> list[ExtensionRef]:
        raise ProcessInvocationError("code exited with status 1: no display")

    monkeypatch.setattr(extension_manager.CodeManager, "list_extensions", _fail)

    result = runner.invoke(extension_manager.app, [])

    assert result.exit_code == 1
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == ["Error: code exited with status 1: no display"]
