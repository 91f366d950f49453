"""
Unit tests for sysroot and standard-library source tree location.
"""

import os

import pytest
from pathlib import Path

from sysrootkit.core.config import ToolchainEnvironment
from sysrootkit.core.exceptions import SourceComponentMissing
from sysrootkit.toolchain.sysroot import SOURCE_LAYOUTS, SourceLayout, Src, Sysroot


def _rust_dir(sysroot: Path) -> Path:
    return sysroot / "lib" / "rustlib" / "src" / "rust"


class TestSourceLayouts:
    """Tests for the ordered layout table."""

    def test_legacy_probed_first(self):
        """Test that the legacy layout precedes the modern one."""
        assert [layout.name for layout in SOURCE_LAYOUTS] == ["legacy", "modern"]

    def test_layout_entries(self):
        """Test the directories and manifests of each layout."""
        assert SOURCE_LAYOUTS[0] == SourceLayout(
            "legacy", ("rust", "src"), ("libstd", "Cargo.toml")
        )
        assert SOURCE_LAYOUTS[1] == SourceLayout(
            "modern", ("rust", "library"), ("std", "Cargo.toml")
        )


class TestSysrootSrc:
    """Tests for Sysroot.src."""

    def test_legacy_layout(self, legacy_sysroot):
        """Test locating the pre-1.47 layout."""
        src = Sysroot(legacy_sysroot).src()

        assert src.path == _rust_dir(legacy_sysroot) / "src"
        assert src.layout.name == "legacy"

    def test_modern_layout(self, modern_sysroot):
        """Test locating the library/ layout."""
        src = Sysroot(modern_sysroot).src()

        assert src.path == _rust_dir(modern_sysroot) / "library"
        assert src.layout.name == "modern"

    def test_legacy_preferred_when_both_present(self, dual_layout_sysroot):
        """Test that legacy wins when both manifests exist."""
        src = Sysroot(dual_layout_sysroot).src()

        assert src.path == _rust_dir(dual_layout_sysroot) / "src"

    def test_missing_component(self, empty_sysroot):
        """Test the actionable error when rust-src is not installed."""
        with pytest.raises(SourceComponentMissing) as exc_info:
            Sysroot(empty_sysroot).src()

        assert exc_info.value.sysroot == empty_sysroot
        assert "rustup component add rust-src" in str(exc_info.value)

    def test_nonexistent_sysroot(self, tmp_path):
        """Test that a sysroot path that doesn't exist reports the missing component."""
        with pytest.raises(SourceComponentMissing):
            Sysroot(tmp_path / "nowhere").src()

    def test_manifest_directory_does_not_count(self, empty_sysroot):
        """Test that a directory named Cargo.toml does not confirm a layout."""
        (_rust_dir(empty_sysroot) / "library" / "std" / "Cargo.toml").mkdir(
            parents=True
        )

        with pytest.raises(SourceComponentMissing):
            Sysroot(empty_sysroot).src()

    def test_values_are_immutable(self, legacy_sysroot):
        """Test that Sysroot and Src cannot be mutated."""
        root = Sysroot(legacy_sysroot)
        src = root.src()

        with pytest.raises(AttributeError):
            root.path = Path("/elsewhere")
        with pytest.raises(AttributeError):
            src.path = Path("/elsewhere")


class TestSrcFromEnv:
    """Tests for the source tree override."""

    def test_no_override(self):
        """Test that None is returned without an override."""
        assert Src.from_env(ToolchainEnvironment()) is None

    def test_override_is_canonicalized(self, modern_sysroot, monkeypatch):
        """Test that a relative override becomes an absolute path."""
        monkeypatch.chdir(modern_sysroot)
        env = ToolchainEnvironment(rust_src=Path("lib/rustlib/src/rust/library"))

        src = Src.from_env(env)

        assert src.path == (_rust_dir(modern_sysroot) / "library").resolve()
        assert src.path.is_absolute()

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_override_resolves_symlinks(self, modern_sysroot, tmp_path):
        """Test that symlinks in the override are resolved."""
        link = tmp_path / "rust-src-link"
        link.symlink_to(_rust_dir(modern_sysroot) / "library")

        src = Src.from_env(ToolchainEnvironment(rust_src=link))

        assert src.path == (_rust_dir(modern_sysroot) / "library").resolve()

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlink_loop_override_kept(self, tmp_path):
        """Test that a self-referencing symlink override is used as given."""
        loop = tmp_path / "loop"
        os.symlink(loop, loop)

        src = Src.from_env(ToolchainEnvironment(rust_src=loop))

        assert src.path == loop
        assert src.layout is None

    def test_uncanonicalizable_override_kept(self):
        """Test that a missing override path is used as given."""
        missing = Path("does/not/exist")

        src = Src.from_env(ToolchainEnvironment(rust_src=missing))

        assert src.path == missing
        assert src.layout is None
