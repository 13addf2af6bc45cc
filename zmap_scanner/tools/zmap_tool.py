"""ZMap tool implementation: binary discovery and capability introspection."""

import os
import shutil
from typing import List, Optional

from .base import ExternalTool, ToolExecutionResult
from ..core.exceptions import (
    BinaryNotFoundError, InvalidBinaryError, CapabilityQueryError
)
from ..core.scanning.data_structures import OutputField


PRODUCT_NAME = "zmap"

LIST_PROBE_MODULES = "--list-probe-modules"
LIST_OUTPUT_MODULES = "--list-output-modules"
LIST_OUTPUT_FIELDS = "--list-output-fields"
VERSION = "--version"


def parse_line_list(output: str) -> List[str]:
    """Split single-column output into its non-empty lines."""
    return [line for line in output.split("\n") if line != ""]


def parse_output_fields(output: str) -> List[OutputField]:
    """Parse ``--list-output-fields`` output.

    Each line holds a field name, a type and a free-text explanation
    separated by whitespace, e.g. ``saddr TEXT source IP address``.

    Raises:
        CapabilityQueryError: If a line has no type column
    """
    fields = []
    for line in parse_line_list(output):
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) < 2:
            raise CapabilityQueryError(
                LIST_OUTPUT_FIELDS, f"unparseable output field line: {line!r}"
            )
        fields.append(OutputField(
            name=tokens[0],
            type=tokens[1].rstrip(":"),
            explanation=" ".join(tokens[2:]),
        ))
    return fields


def parse_version(output: str) -> Optional[str]:
    """Strip the product name from ``--version`` output.

    Returns:
        Remaining tokens joined by a space, or None if the output does not
        contain the ``zmap`` token at all
    """
    tokens = output.strip("\n").split()
    if PRODUCT_NAME not in tokens:
        return None
    return " ".join(token for token in tokens if token != PRODUCT_NAME)


class ZMapTool(ExternalTool):
    """Handle on one zmap executable.

    Every query starts a new zmap process; nothing is cached.
    """

    def __init__(self, binary_path: str):
        super().__init__(PRODUCT_NAME, binary_path)

    @classmethod
    def locate(cls, binary_path: Optional[str] = None) -> 'ZMapTool':
        """Resolve the zmap executable.

        Args:
            binary_path: Explicit path; searched on PATH when omitted

        Raises:
            BinaryNotFoundError: If no executable can be found
            InvalidBinaryError: If an explicit binary does not identify as zmap
        """
        if binary_path is None:
            found = shutil.which(PRODUCT_NAME)
            if found is None:
                raise BinaryNotFoundError()
            return cls(found)

        if not os.path.exists(binary_path):
            raise BinaryNotFoundError(binary_path)

        tool = cls(binary_path)
        try:
            result = tool._run_command([VERSION])
        except OSError as e:
            raise InvalidBinaryError(binary_path, str(e)) from e

        if parse_version(result.stdout) is None:
            raise InvalidBinaryError(binary_path, result.stdout.strip())
        return tool

    def _query(self, flag: str) -> ToolExecutionResult:
        try:
            result = self._run_command([flag])
        except OSError as e:
            raise CapabilityQueryError(flag, str(e)) from e

        if not result.success:
            raise CapabilityQueryError(
                flag,
                f"exit code {result.returncode}",
                exit_code=result.returncode,
                stderr=result.stderr,
            )
        return result

    def list_probe_modules(self) -> List[str]:
        """Return the probe module names zmap supports."""
        return parse_line_list(self._query(LIST_PROBE_MODULES).stdout)

    def list_output_modules(self) -> List[str]:
        """Return the output module names zmap supports."""
        return parse_line_list(self._query(LIST_OUTPUT_MODULES).stdout)

    def list_output_fields(self) -> List[OutputField]:
        """Return the output fields zmap supports."""
        return parse_output_fields(self._query(LIST_OUTPUT_FIELDS).stdout)

    def get_version(self) -> str:
        """Return zmap's self-reported version without the product name.

        Raises:
            InvalidBinaryError: If the output does not mention zmap
        """
        result = self._query(VERSION)
        version = parse_version(result.stdout)
        if version is None:
            raise InvalidBinaryError(self.binary_path, result.stdout.strip())
        return version
