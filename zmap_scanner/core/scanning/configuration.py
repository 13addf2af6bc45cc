"""Per-scanner state handed to options and to the orchestrator."""

from dataclasses import dataclass, field

from .arguments import ArgumentList
from .context import ScanContext
from ...tools.zmap_tool import ZMapTool


@dataclass
class ScanConfiguration:
    """State owned by exactly one scanner.

    The binary is resolved once at construction and never changes; the
    argument list grows as options are applied.
    """
    tool: ZMapTool
    context: ScanContext = field(default_factory=ScanContext.background)
    arguments: ArgumentList = field(default_factory=ArgumentList)

    @property
    def binary_path(self) -> str:
        return self.tool.binary_path
