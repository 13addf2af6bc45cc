"""Base class for external command line tools."""

import subprocess
import time
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass
class ToolExecutionResult:
    """Result of a short-lived tool invocation."""
    tool: str
    returncode: int
    stdout: str
    stderr: str
    execution_time: float
    command: List[str]

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ExternalTool(ABC):
    """Abstract base class for a binary driven through its command line."""

    def __init__(self, name: str, binary_path: str):
        """Initialize external tool.

        Args:
            name: Tool name, also the executable name searched on PATH
            binary_path: Resolved path of the executable
        """
        self.name = name
        self.binary_path = binary_path
        self.logger = logging.getLogger(f"zmap_scanner.tool.{name}")

    def _run_command(self, args: List[str]) -> ToolExecutionResult:
        """Run the tool synchronously and capture its output.

        Args:
            args: Arguments passed after the binary path

        Returns:
            ToolExecutionResult with decoded output

        Raises:
            OSError: If the process cannot be started
        """
        cmd = [self.binary_path] + list(args)
        self.logger.debug(f"Running command: {' '.join(cmd)}")

        start_time = time.time()
        completed = subprocess.run(cmd, capture_output=True)

        result = ToolExecutionResult(
            tool=self.name,
            returncode=completed.returncode,
            stdout=completed.stdout.decode('utf-8', errors='ignore'),
            stderr=completed.stderr.decode('utf-8', errors='ignore'),
            execution_time=time.time() - start_time,
            command=cmd,
        )

        self.logger.debug(
            f"Command finished with return code {result.returncode} "
            f"in {result.execution_time:.2f}s"
        )
        return result

    @abstractmethod
    def get_version(self) -> str:
        """Return the version reported by the tool."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', binary_path='{self.binary_path}')"
