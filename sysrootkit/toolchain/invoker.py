"""
sysrootkit/toolchain/invoker.py

Subprocess-backed compiler invocation.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from sysrootkit.core.config import DEFAULT_RUSTC, ToolchainEnvironment
from sysrootkit.core.exceptions import ToolInvocationError
from sysrootkit.core.interfaces import ToolInvoker

logger = logging.getLogger(__name__)


class SubprocessToolInvoker(ToolInvoker):
    """
    Run the compiler executable as a child process.

    Each call spawns exactly one process and blocks until it exits. There is
    no timeout: a hung compiler hangs the caller.

    Attributes:
        executable: Compiler executable name or path
        verbose: Log every command line at INFO instead of DEBUG
    """

    def __init__(self, executable: Optional[str] = None, verbose: bool = False):
        self.executable = executable or DEFAULT_RUSTC
        self.verbose = verbose

    @classmethod
    def from_environment(cls, env: ToolchainEnvironment) -> "SubprocessToolInvoker":
        """Create an invoker honouring the ``RUSTC`` override and verbosity."""
        return cls(env.rustc_command, verbose=env.verbose)

    def command(self, args: Sequence[str]) -> List[str]:
        """Full command line for the given arguments."""
        return [self.executable, *args]

    def run(self, args: Sequence[str]) -> str:
        cmd = self.command(args)
        logger.log(
            logging.INFO if self.verbose else logging.DEBUG, "+ " + " ".join(cmd)
        )

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as e:
            logger.debug(f"Failed to spawn {self.executable}: {e}")
            raise ToolInvocationError(cmd, None, str(e)) from e
        except UnicodeDecodeError as e:
            logger.debug(f"{' '.join(cmd)} produced output that is not UTF-8: {e}")
            raise ToolInvocationError(
                cmd, None, f"output is not valid UTF-8: {e}"
            ) from e

        if result.returncode != 0:
            logger.debug(
                f"{' '.join(cmd)} returned {result.returncode}: {result.stderr[:200]}"
            )
            raise ToolInvocationError(cmd, result.returncode, result.stderr)

        return result.stdout

    def __repr__(self) -> str:
        return f"SubprocessToolInvoker({self.executable!r}, verbose={self.verbose})"
