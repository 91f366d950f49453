"""
Compilation target resolution.

This module decides whether a requested triple is one the compiler knows
natively or one described by a custom JSON target spec, and produces the
stable hash contribution that cache keys are built from.

Resolution order (first match wins):
    1. The triple is in ``rustc --print target-list``  -> BuiltinTarget
    2. ``<project_root>/<triple>.json`` exists          -> CustomTarget
    3. ``<RUST_TARGET_PATH>/<triple>.json`` exists      -> CustomTarget
    4. Otherwise                                        -> None (unknown)
"""

import hashlib
import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from sysrootkit.core.config import ToolchainEnvironment
from sysrootkit.core.exceptions import InvalidSpecJson, TargetSpecReadError
from sysrootkit.core.interfaces import ToolInvoker
from sysrootkit.toolchain import rustc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltinTarget:
    """
    Target the compiler knows natively.

    Attributes:
        triple: Target triple as reported by ``rustc --print target-list``
    """

    triple: str

    def __post_init__(self):
        if not self.triple:
            raise ValueError("Target triple cannot be empty")


@dataclass(frozen=True)
class CustomTarget:
    """
    Target described by a JSON spec file.

    Attributes:
        triple: File stem used to locate the spec
        spec_path: Spec file; existed when the target was resolved
    """

    triple: str
    spec_path: Path

    def __post_init__(self):
        if not self.triple:
            raise ValueError("Target triple cannot be empty")


Target = Union[BuiltinTarget, CustomTarget]


def target_triple(target: Target) -> str:
    """Return the triple of either target variant."""
    if isinstance(target, BuiltinTarget):
        return target.triple
    if isinstance(target, CustomTarget):
        return target.triple
    raise TypeError(f"Unsupported target type: {type(target).__name__}")


class TargetResolver:
    """
    Resolve requested triples into targets.

    Every call re-reads the target list and the filesystem; callers that
    need the same answer repeatedly should keep the returned target.

    Example:
        >>> env = load_environment(project_root)
        >>> resolver = TargetResolver(SubprocessToolInvoker.from_environment(env), env)
        >>> resolver.resolve('thumbv7m-none-eabi', project_root)
        CustomTarget(triple='thumbv7m-none-eabi', spec_path=...)
    """

    def __init__(self, invoker: ToolInvoker, env: Optional[ToolchainEnvironment] = None):
        self.invoker = invoker
        self.env = env or ToolchainEnvironment()

    def resolve(self, triple: str, project_root: Path) -> Optional[Target]:
        """
        Resolve a triple.

        Args:
            triple: Requested target triple
            project_root: Project directory searched for ``<triple>.json``

        Returns:
            BuiltinTarget or CustomTarget, or None if the triple is neither
            builtin nor described by any reachable spec file

        Raises:
            ValueError: If triple is empty
            ToolInvocationError: If the target list cannot be obtained
        """
        if not triple:
            raise ValueError("Target triple cannot be empty")

        if triple in rustc.targets(self.invoker):
            logger.debug(f"{triple} is a builtin target")
            return BuiltinTarget(triple)

        spec_name = f"{triple}.json"

        spec_path = project_root / spec_name
        if spec_path.is_file():
            logger.debug(f"{triple} is a custom target defined by {spec_path}")
            return CustomTarget(triple, spec_path)

        if self.env.target_path is not None:
            spec_path = self.env.target_path / spec_name
            if spec_path.is_file():
                logger.debug(f"{triple} is a custom target defined by {spec_path}")
                return CustomTarget(triple, spec_path)

        logger.debug(f"{triple} is neither builtin nor a known custom target")
        return None


def resolve_target(
    triple: str,
    project_root: Path,
    invoker: ToolInvoker,
    env: Optional[ToolchainEnvironment] = None,
) -> Optional[Target]:
    """Resolve a triple; see ``TargetResolver.resolve``."""
    return TargetResolver(invoker, env).resolve(triple, project_root)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


def canonical_spec_json(spec_path: Path) -> str:
    """
    Canonical text form of a JSON target spec.

    Keys are sorted and all insignificant whitespace dropped, so files that
    differ only in key order or formatting give the same string.

    Raises:
        TargetSpecReadError: If the file cannot be read
        InvalidSpecJson: If the contents are not valid JSON
    """
    try:
        raw = spec_path.read_bytes()
    except OSError as e:
        raise TargetSpecReadError(spec_path) from e

    try:
        value = json.loads(
            raw.decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
        text = json.dumps(
            value, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )
        # Lone surrogate escapes decode but cannot be encoded back to UTF-8.
        text.encode("utf-8")
    except (ValueError, RecursionError) as e:
        raise InvalidSpecJson(spec_path) from e

    return text


def hash_target(target: Target, hasher: Any) -> None:
    """
    Feed a target's identity into a hash accumulator.

    Builtin targets contribute nothing. Custom targets contribute the
    canonical form of their spec file.

    Args:
        target: Resolved target
        hasher: Object with an ``update(bytes)`` method (e.g. ``hashlib.sha256()``)

    Raises:
        TargetSpecReadError: If a custom spec file cannot be read
        InvalidSpecJson: If a custom spec file is not valid JSON
    """
    if isinstance(target, BuiltinTarget):
        return
    if isinstance(target, CustomTarget):
        hasher.update(canonical_spec_json(target.spec_path).encode("utf-8"))
        return
    raise TypeError(f"Unsupported target type: {type(target).__name__}")


def compute_target_hash(target: Target, algorithm: str = "sha256") -> str:
    """
    Hex digest of a target's hash contribution.

    Args:
        target: Resolved target
        algorithm: Hash algorithm ('sha256', 'sha512')

    Returns:
        Hex string of hash

    Raises:
        ValueError: If algorithm is not supported

    Example:
        >>> compute_target_hash(BuiltinTarget('x86_64-unknown-linux-gnu'))
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    algorithm = algorithm.lower()

    if algorithm == "sha256":
        hasher = hashlib.sha256()
    elif algorithm == "sha512":
        hasher = hashlib.sha512()
    else:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    hash_target(target, hasher)
    return hasher.hexdigest()
