"""
Core interfaces for SysrootKit.

This module defines the abstract interfaces that the resolution code depends
on. Concrete implementations spawn real processes; tests substitute fakes
without the resolvers knowing the difference.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class ToolInvoker(ABC):
    """
    Abstract interface for running the compiler executable.

    Implementations run the configured compiler with the given arguments,
    block until it exits, and hand back its standard output.
    """

    @abstractmethod
    def run(self, args: Sequence[str]) -> str:
        """
        Run the compiler and capture its standard output.

        Args:
            args: Arguments passed after the executable (e.g. ["--print", "sysroot"])

        Returns:
            Standard output decoded as text

        Raises:
            ToolInvocationError: If the process cannot be spawned or exits nonzero
        """
        pass


__all__ = [
    "ToolInvoker",
]
