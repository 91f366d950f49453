"""
Core functionality for SysrootKit.

This package contains the foundational modules that other components depend on.
"""

from sysrootkit.core.config import (
    ToolchainEnvironment,
    load_config,
    load_environment,
)

from sysrootkit.core.directory import (
    ProjectRoot,
    find_project_root,
)

from sysrootkit.core.interfaces import ToolInvoker

from sysrootkit.core.exceptions import (
    SysrootKitError,
    ConfigError,
    ToolchainError,
    ToolInvocationError,
    ToolOutputError,
    SourceError,
    SourceComponentMissing,
    TargetSpecError,
    InvalidSpecJson,
    TargetSpecReadError,
)

__all__ = [
    "ToolchainEnvironment",
    "load_config",
    "load_environment",
    "ProjectRoot",
    "find_project_root",
    "ToolInvoker",
    "SysrootKitError",
    "ConfigError",
    "ToolchainError",
    "ToolInvocationError",
    "ToolOutputError",
    "SourceError",
    "SourceComponentMissing",
    "TargetSpecError",
    "InvalidSpecJson",
    "TargetSpecReadError",
]
