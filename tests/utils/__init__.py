"""
Test utilities for SysrootKit testing.

This package provides mocking utilities that let resolver tests run without
a real Rust toolchain.
"""

from .mocks import FakeToolInvoker

__all__ = [
    "FakeToolInvoker",
]
