"""External tool wrappers.

Provides the zmap executable handle used for binary discovery and for
querying the capability vocabulary (probe modules, output modules, fields).
"""

from .base import ExternalTool, ToolExecutionResult
from .zmap_tool import (
    ZMapTool, parse_line_list, parse_output_fields, parse_version
)

__all__ = [
    'ExternalTool',
    'ToolExecutionResult',
    'ZMapTool',
    'parse_line_list',
    'parse_output_fields',
    'parse_version'
]
