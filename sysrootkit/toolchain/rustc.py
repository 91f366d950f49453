"""
Queries answered by the Rust compiler itself.

Every function here spawns ``rustc`` once through the supplied ``ToolInvoker``
and parses what it prints. Nothing is cached.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from sysrootkit.core.config import ToolchainEnvironment
from sysrootkit.core.exceptions import ToolOutputError
from sysrootkit.core.interfaces import ToolInvoker
from sysrootkit.toolchain.sysroot import Src, Sysroot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionMeta:
    """
    Compiler version details from ``rustc -vV``.

    Attributes:
        short_version: First output line (e.g. 'rustc 1.75.0 (82e1608df 2023-12-21)')
        release: Release string (e.g. '1.77.0-nightly')
        commit_hash: Full commit hash, None for builds without git info
        commit_date: Commit date, None for builds without git info
        host: Host target triple
        llvm_version: Bundled LLVM version, if reported
        channel: 'stable', 'beta', 'nightly' or 'dev'
    """

    short_version: str
    release: str
    commit_hash: Optional[str]
    commit_date: Optional[str]
    host: str
    llvm_version: Optional[str] = None
    channel: str = "stable"


def targets(invoker: ToolInvoker) -> List[str]:
    """
    List the target triples the compiler knows natively.

    Runs ``rustc --print target-list``. Order is preserved and duplicates
    are kept.
    """
    return invoker.run(["--print", "target-list"]).splitlines()


def sysroot(invoker: ToolInvoker) -> Sysroot:
    """
    Ask the compiler for its sysroot.

    Runs ``rustc --print sysroot``. The path is not checked for existence.
    """
    return Sysroot(Path(invoker.run(["--print", "sysroot"]).strip()))


def version(invoker: ToolInvoker) -> VersionMeta:
    """
    Ask the compiler for its version details.

    Runs ``rustc -vV``.

    Raises:
        ToolOutputError: If ``release`` or ``host`` is missing from the output
    """
    lines = invoker.run(["-vV"]).strip().splitlines()
    if not lines:
        raise ToolOutputError("`rustc -vV` printed nothing")

    fields: Dict[str, str] = {}
    for line in lines[1:]:
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()

    for required in ("release", "host"):
        if required not in fields:
            raise ToolOutputError(f"`rustc -vV` output is missing '{required}'")

    release = fields["release"]
    return VersionMeta(
        short_version=lines[0].strip(),
        release=release,
        commit_hash=_known(fields.get("commit-hash")),
        commit_date=_known(fields.get("commit-date")),
        host=fields["host"],
        llvm_version=fields.get("LLVM version"),
        channel=_channel(release),
    )


def locate_src(env: ToolchainEnvironment, invoker: ToolInvoker) -> Src:
    """
    Find the standard-library sources to build against.

    The source tree override wins; the compiler is only asked for its
    sysroot when no override is configured.

    Raises:
        ToolInvocationError: If the sysroot query fails
        SourceComponentMissing: If the sysroot has no ``rust-src`` component
    """
    src = Src.from_env(env)
    if src is not None:
        logger.debug(f"Using rust-src override {src.path}")
        return src

    return sysroot(invoker).src()


def _known(value: Optional[str]) -> Optional[str]:
    if value is None or value == "unknown":
        return None
    return value


def _channel(release: str) -> str:
    if "-dev" in release:
        return "dev"
    if "-nightly" in release:
        return "nightly"
    if "-beta" in release:
        return "beta"
    return "stable"
