"""Probe and output module options.

Module names and output fields are validated against the vocabulary the
zmap binary reports about itself, so each of these options runs zmap once
when applied.
"""

from typing import List, Sequence

from .base import Option, TextOption
from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration


OUTPUT_FIELDS_FLAG = "--output-fields"


class ProbeModuleOption(Option):
    flag = "--probe-module"

    def __init__(self, module: str):
        self.module = module

    def build(self, configuration: ScanConfiguration) -> List[str]:
        available = configuration.tool.list_probe_modules()
        if self.module not in available:
            raise OptionValidationError(
                "given probe module is not in available probe modules",
                flag=self.flag, value=self.module,
                suggestion=f"Available probe modules: {', '.join(available)}"
            )
        return [self.flag, self.module]


class OutputModuleOption(Option):
    flag = "--output-module"

    def __init__(self, module: str):
        self.module = module

    def build(self, configuration: ScanConfiguration) -> List[str]:
        available = configuration.tool.list_output_modules()
        if self.module not in available:
            raise OptionValidationError(
                "given output module is not in available output modules",
                flag=self.flag, value=self.module,
                suggestion=f"Available output modules: {', '.join(available)}"
            )
        return [self.flag, self.module]


class OutputFieldsOption(Option):
    """Comma-joined list of result fields, each known to zmap."""

    flag = OUTPUT_FIELDS_FLAG

    def __init__(self, fields: Sequence[str]):
        if isinstance(fields, str):
            fields = fields.split(",")
        self.fields = list(fields)

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if not self.fields:
            raise OptionValidationError("at least one output field is required",
                                        flag=self.flag)

        available = {field.name for field in configuration.tool.list_output_fields()}
        for field in self.fields:
            if field not in available:
                raise OptionValidationError(
                    f"given field {field} is not in available fields",
                    flag=self.flag, value=field
                )
        return [self.flag, ",".join(self.fields)]


def with_probe_module(module: str) -> ProbeModuleOption:
    """Select the probe module (zmap default: ``tcp_synscan``)."""
    return ProbeModuleOption(module)


def with_probe_args(probe_args: str) -> TextOption:
    """Arguments passed to the probe module."""
    return TextOption("--probe-args", probe_args)


def with_output_fields(fields: Sequence[str]) -> OutputFieldsOption:
    """Fields that should be written for each result."""
    return OutputFieldsOption(fields)


def with_output_module(module: str) -> OutputModuleOption:
    """Select the output module (zmap default: ``default``)."""
    return OutputModuleOption(module)


def with_output_args(output_args: str) -> TextOption:
    """Arguments passed to the output module."""
    return TextOption("--output-args", output_args)


def with_output_filter(output_filter: str) -> TextOption:
    """Filter over response fields limiting what reaches the output module."""
    return TextOption("--output-filter", output_filter)
