"""
Cross-compilation support for SysrootKit.

This module resolves the compilation target a sysroot is built for, either a
triple builtin to the compiler or one described by a custom JSON spec file,
and provides the hash contribution used in build cache keys.
"""

from sysrootkit.cross.targets import (
    BuiltinTarget,
    CustomTarget,
    Target,
    TargetResolver,
    canonical_spec_json,
    compute_target_hash,
    hash_target,
    resolve_target,
    target_triple,
)

__all__ = [
    "BuiltinTarget",
    "CustomTarget",
    "Target",
    "TargetResolver",
    "canonical_spec_json",
    "compute_target_hash",
    "hash_target",
    "resolve_target",
    "target_triple",
]
