"""Toolchain environment configuration for SysrootKit.

Environment variables and the optional ``sysrootkit.yaml`` project file are
read once into a ``ToolchainEnvironment`` value which is then passed to the
resolvers. Nothing else in the package reads ``os.environ``.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from sysrootkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_RUSTC = "rustc"

ENV_RUSTC = "RUSTC"
ENV_RUST_SRC = "SYSROOTKIT_RUST_SRC"
ENV_TARGET_PATH = "RUST_TARGET_PATH"
ENV_VERBOSE = "SYSROOTKIT_VERBOSE"

CONFIG_FILENAME = "sysrootkit.yaml"

_CONFIG_KEYS = ("rustc", "rust_src", "target_path", "verbose")
_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ToolchainEnvironment:
    """
    Snapshot of the settings that steer toolchain probing.

    Attributes:
        rustc: Compiler executable override (None means ``rustc``)
        rust_src: Standard-library source tree override, as given
        target_path: Single directory searched for ``<triple>.json`` files
        verbose: Log every compiler invocation at INFO level
    """

    rustc: Optional[str] = None
    rust_src: Optional[Path] = None
    target_path: Optional[Path] = None
    verbose: bool = False

    @property
    def rustc_command(self) -> str:
        """Executable used for all compiler invocations."""
        return self.rustc or DEFAULT_RUSTC

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "ToolchainEnvironment":
        """
        Build an environment snapshot from environment variables only.

        Empty variables are treated as unset.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            ToolchainEnvironment
        """
        return _apply_environ(cls(), os.environ if environ is None else environ)


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Parse a ``sysrootkit.yaml`` file.

    Relative ``rust_src`` and ``target_path`` values are resolved against the
    directory containing the file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Dictionary holding the recognised keys that are present

    Raises:
        ConfigError: If the file is unreadable, malformed, or has unknown keys
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    unknown = sorted(set(data) - set(_CONFIG_KEYS))
    if unknown:
        raise ConfigError(
            f"{config_path}: unknown configuration keys: {', '.join(unknown)}"
        )

    config: Dict[str, Any] = {}

    if data.get("rustc") is not None:
        config["rustc"] = str(data["rustc"])

    for key in ("rust_src", "target_path"):
        value = data.get(key)
        if value is None:
            continue
        path = Path(str(value)).expanduser()
        if not path.is_absolute():
            path = config_path.parent / path
        config[key] = path

    if "verbose" in data:
        if not isinstance(data["verbose"], bool):
            raise ConfigError(f"{config_path}: 'verbose' must be true or false")
        config["verbose"] = data["verbose"]

    return config


def load_environment(
    project_root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ToolchainEnvironment:
    """
    Gather the toolchain environment once for a resolution session.

    Values come from ``<project_root>/sysrootkit.yaml`` when it exists, then
    environment variables override them.

    Args:
        project_root: Project directory that may hold a config file
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        ToolchainEnvironment

    Raises:
        ConfigError: If the config file exists but is invalid
    """
    env = ToolchainEnvironment()

    if project_root is not None:
        config_path = project_root / CONFIG_FILENAME
        if config_path.is_file():
            logger.debug(f"Loading configuration from {config_path}")
            env = ToolchainEnvironment(**load_config(config_path))

    return _apply_environ(env, os.environ if environ is None else environ)


def _apply_environ(
    env: ToolchainEnvironment, environ: Mapping[str, str]
) -> ToolchainEnvironment:
    """Overlay environment variables on top of an existing snapshot."""
    rustc = environ.get(ENV_RUSTC) or env.rustc
    rust_src = environ.get(ENV_RUST_SRC)
    target_path = environ.get(ENV_TARGET_PATH)
    verbose = environ.get(ENV_VERBOSE)

    return ToolchainEnvironment(
        rustc=rustc,
        rust_src=Path(rust_src) if rust_src else env.rust_src,
        target_path=Path(target_path) if target_path else env.target_path,
        verbose=(verbose.strip().lower() in _TRUE_VALUES) if verbose else env.verbose,
    )


__all__ = [
    "DEFAULT_RUSTC",
    "ENV_RUSTC",
    "ENV_RUST_SRC",
    "ENV_TARGET_PATH",
    "ENV_VERBOSE",
    "CONFIG_FILENAME",
    "ToolchainEnvironment",
    "load_config",
    "load_environment",
]
