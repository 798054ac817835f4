from __future__ import annotations

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="run tests against the live Visual Studio Marketplace",
    )
    parser.addoption(
        "--only-slow",
        action="store_true",
        default=False,
        help="run only the live marketplace tests",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: needs network access to the marketplace")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    only_slow = bool(config.getoption("--only-slow"))

    if only_slow:
        selected = [item for item in items if "slow" in item.keywords]
        deselected = [item for item in items if "slow" not in item.keywords]
        if deselected:
            config.hook.pytest_deselected(items=deselected)
        items[:] = selected

    if only_slow or config.getoption("--slow"):
        return

    skip_slow = pytest.mark.skip(reason="need --slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def _default_marketplace_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VSCNIX_MARKETPLACE_URL", raising=False)
