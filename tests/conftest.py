"""
Pytest configuration and shared fixtures for SysrootKit tests.
"""

import pytest
from pathlib import Path

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.toolchains import (
    legacy_sysroot,
    modern_sysroot,
    dual_layout_sysroot,
    empty_sysroot,
)
from tests.fixtures.projects import (
    cargo_project,
    target_search_dir,
)
from tests.utils.mocks import FakeToolInvoker


BUILTIN_TRIPLES = [
    "aarch64-unknown-linux-gnu",
    "thumbv7em-none-eabihf",
    "x86_64-unknown-linux-gnu",
    "wasm32-unknown-unknown",
]


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require a real rustc installation",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def fake_rustc() -> FakeToolInvoker:
    """Fake compiler that knows a handful of builtin targets."""
    return FakeToolInvoker.with_targets(BUILTIN_TRIPLES)


@pytest.fixture
def fake_rustc_for_sysroot(legacy_sysroot: Path) -> FakeToolInvoker:
    """Fake compiler reporting the legacy-layout sysroot (with trailing newline)."""
    return FakeToolInvoker({("--print", "sysroot"): f"{legacy_sysroot}\n"})
