"""
Centralized exception hierarchy for SysrootKit.

This module defines all custom exceptions raised while probing the Rust
toolchain, locating its source tree, and resolving compilation targets.

An unknown target is not an error: resolution returns ``None`` for it.
"""

from pathlib import Path
from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class SysrootKitError(Exception):
    """Base exception for all SysrootKit errors."""

    pass


class ConfigError(SysrootKitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Toolchain Invocation Exceptions
# ============================================================================


class ToolchainError(SysrootKitError):
    """Base exception for errors talking to the compiler executable."""

    pass


class ToolInvocationError(ToolchainError):
    """
    Raised when the compiler fails to spawn or exits with a nonzero status.

    Attributes:
        command: Full command line that was executed
        returncode: Process exit status, or None if the process never started
        stderr: Captured diagnostic output (or the spawn error message)
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr

        cmdline = " ".join(self.command)
        if returncode is None:
            msg = f"Failed to run `{cmdline}`"
        else:
            msg = f"`{cmdline}` exited with status {returncode}"
        if stderr.strip():
            msg += f": {stderr.strip()}"
        super().__init__(msg)


class ToolOutputError(ToolchainError):
    """Raised when compiler output cannot be understood."""

    pass


# ============================================================================
# Source Tree Exceptions
# ============================================================================


class SourceError(SysrootKitError):
    """Base exception for standard-library source tree errors."""

    pass


class SourceComponentMissing(SourceError):
    """Raised when no known source layout is present under the sysroot."""

    def __init__(self, sysroot: Path):
        self.sysroot = sysroot
        super().__init__(
            f"`rust-src` component not found under {sysroot}. "
            "Run `rustup component add rust-src`."
        )


# ============================================================================
# Target Spec Exceptions
# ============================================================================


class TargetSpecError(SysrootKitError):
    """Base exception for custom target spec file errors."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(message)


class InvalidSpecJson(TargetSpecError):
    """Raised when a custom target spec file is not valid JSON."""

    def __init__(self, path: Path):
        super().__init__(path, f"{path} is not valid JSON")


class TargetSpecReadError(TargetSpecError):
    """Raised when a custom target spec file cannot be read."""

    def __init__(self, path: Path):
        super().__init__(path, f"Couldn't read {path}")
