"""
SysrootKit: target and toolchain-layout resolution for Rust sysroot builds.
"""

__version__ = "0.1.0"
