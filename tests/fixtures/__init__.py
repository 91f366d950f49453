"""Test fixtures for SysrootKit tests.

This package provides reusable pytest fixtures for testing SysrootKit components.
Fixtures are organized by type:

- toolchains: Mock Rust sysroots (legacy, modern and missing rust-src layouts)
- projects: Cargo projects and custom target search directories

Import fixtures in your tests using:
    from tests.fixtures.toolchains import legacy_sysroot
    from tests.fixtures.projects import cargo_project
"""

__all__ = [
    "toolchains",
    "projects",
]
