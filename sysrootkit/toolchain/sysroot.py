"""
Rust sysroot and standard-library source tree locations.

The sysroot is the compiler's installation root. The standard-library
sources live inside it once the ``rust-src`` component is installed, in one
of several historical layouts which are probed in a fixed order.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from sysrootkit.core.config import ToolchainEnvironment
from sysrootkit.core.exceptions import SourceComponentMissing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceLayout:
    """
    One known arrangement of the ``rust-src`` component.

    Attributes:
        name: Short layout name used in logs
        source_dir: Source root, relative to ``<sysroot>/lib/rustlib/src``
        manifest: File relative to the source root whose presence confirms
            the layout
    """

    name: str
    source_dir: Tuple[str, ...]
    manifest: Tuple[str, ...]


# Probed in order; first confirmed layout wins.
SOURCE_LAYOUTS: Tuple[SourceLayout, ...] = (
    SourceLayout("legacy", ("rust", "src"), ("libstd", "Cargo.toml")),
    SourceLayout("modern", ("rust", "library"), ("std", "Cargo.toml")),
)


@dataclass(frozen=True)
class Src:
    """
    Path to the Rust standard-library source tree.

    Attributes:
        path: Source root (contains ``std`` or ``libstd``)
        layout: Layout the path was derived from, None for an override
    """

    path: Path
    layout: Optional[SourceLayout] = None

    @classmethod
    def from_env(cls, env: ToolchainEnvironment) -> Optional["Src"]:
        """
        Use the source tree override, if one is configured.

        The path is canonicalized so that relative overrides keep pointing
        at the same place after the working directory changes; call this
        before any ``chdir``. A path that cannot be canonicalized is used
        as given.

        Args:
            env: Toolchain environment snapshot

        Returns:
            Src, or None when no override is set
        """
        if env.rust_src is None:
            return None

        path = env.rust_src
        try:
            path = path.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.debug(f"Cannot canonicalize {path}, using it as given: {e}")

        return cls(path)


@dataclass(frozen=True)
class Sysroot:
    """
    Path to the compiler's sysroot.

    Attributes:
        path: Installation root reported by ``rustc --print sysroot``
    """

    path: Path

    @property
    def rustlib_src(self) -> Path:
        """Directory holding installed source components."""
        return self.path / "lib" / "rustlib" / "src"

    def src(self) -> Src:
        """
        Locate the standard-library sources inside this sysroot.

        Returns:
            Src for the first layout in ``SOURCE_LAYOUTS`` whose manifest
            exists

        Raises:
            SourceComponentMissing: If no layout is present
        """
        base = self.rustlib_src

        for layout in SOURCE_LAYOUTS:
            source_dir = base.joinpath(*layout.source_dir)
            if source_dir.joinpath(*layout.manifest).is_file():
                logger.debug(f"Found {layout.name} rust-src layout at {source_dir}")
                return Src(source_dir, layout)

        raise SourceComponentMissing(self.path)
