"""
Rust toolchain probing for SysrootKit.

This module provides functionality for:
- Running the compiler executable
- Listing builtin targets
- Locating the sysroot and the standard-library sources
- Reading compiler version details
"""

from sysrootkit.toolchain.invoker import SubprocessToolInvoker

from sysrootkit.toolchain.sysroot import (
    SOURCE_LAYOUTS,
    SourceLayout,
    Src,
    Sysroot,
)

from sysrootkit.toolchain.rustc import (
    VersionMeta,
    locate_src,
    sysroot,
    targets,
    version,
)

__all__ = [
    "SubprocessToolInvoker",
    "SOURCE_LAYOUTS",
    "SourceLayout",
    "Src",
    "Sysroot",
    "VersionMeta",
    "locate_src",
    "sysroot",
    "targets",
    "version",
]
