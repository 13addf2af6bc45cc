"""Preparation and execution of one zmap process."""

import asyncio
import logging
import os
from typing import Optional, Tuple

from .arguments import ArgumentList
from .context import ScanContext
from .data_structures import ExecutionPlan, ProcessOutput, VerbosityLevel
from ..exceptions import ScanExecutionError, ScanTimeoutError
from ...options.basic import STDOUT, OutputFileOption
from ...options.logging_options import (
    VERBOSITY_FLAG, LOG_FILE_FLAG, LOG_DIRECTORY_FLAG
)
from ...options.modules import OUTPUT_FIELDS_FLAG
from ...options.scan import DRY_RUN_FLAG
from ...tools.zmap_tool import ZMapTool


# Log lines are only classified when zmap writes all of them.
DEFAULT_VERBOSITY = VerbosityLevel.LEVEL_5


def _absolute(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return os.path.abspath(path)


class ScanOrchestrator:
    """Turns a scanner's argument list into a running zmap process."""

    def __init__(self, tool: ZMapTool, context: ScanContext):
        """Initialize scan orchestrator.

        Args:
            tool: Resolved zmap binary
            context: Cancellation signal bounding every execution
        """
        self.tool = tool
        self.context = context
        self.logger = logging.getLogger('zmap_scanner.orchestrator')

    def prepare(self, arguments: ArgumentList) -> ExecutionPlan:
        """Derive the final command line and output handling for one run.

        Works on a copy: defaults are injected into the plan, never into the
        caller's argument list.

        Args:
            arguments: Arguments accumulated by the applied options

        Returns:
            ExecutionPlan owning the final argument tuple

        Raises:
            CapabilityQueryError: If output fields must be listed and zmap fails
        """
        final = arguments.copy()

        dry_run = final.has(DRY_RUN_FLAG)
        log_file = _absolute(final.value_of(LOG_FILE_FLAG))
        log_directory = _absolute(final.value_of(LOG_DIRECTORY_FLAG))

        output_file = final.value_of(OutputFileOption.flag)
        output_file = None if output_file == STDOUT else _absolute(output_file)

        if not final.has(VERBOSITY_FLAG):
            final.append_flag(VERBOSITY_FLAG, DEFAULT_VERBOSITY.value)

        if final.has(OUTPUT_FIELDS_FLAG):
            requested = final.value_of(OUTPUT_FIELDS_FLAG)
            output_fields = tuple(field for field in requested.split(",") if field)
        else:
            output_fields = tuple(field.name for field in self.tool.list_output_fields())
            final.append_flag(OUTPUT_FIELDS_FLAG, ",".join(output_fields))
            self.logger.debug(f"Requesting all {len(output_fields)} output fields")

        plan = ExecutionPlan(
            arguments=tuple(final.to_list()),
            output_fields=output_fields,
            dry_run=dry_run,
            log_file=log_file,
            log_directory=log_directory,
            output_file=output_file,
        )
        self.logger.debug(
            f"Prepared scan: dry_run={plan.dry_run}, logs from {plan.log_source}, "
            f"results from {plan.result_source}"
        )
        return plan

    async def execute(self, plan: ExecutionPlan) -> ProcessOutput:
        """Run zmap until it exits or the context is done.

        Args:
            plan: Prepared execution plan

        Returns:
            ProcessOutput with decoded stdout and stderr

        Raises:
            ScanTimeoutError: If the context finished first; the process is
                killed and nothing is returned
            ScanExecutionError: If the process cannot be started
        """
        cmd = [self.tool.binary_path] + list(plan.arguments)

        if self.context.done():
            raise ScanTimeoutError(self.context.timeout, command=cmd)

        self.logger.debug(f"Running command: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise ScanExecutionError(str(e), command=cmd) from e

        communicate = asyncio.ensure_future(process.communicate())
        expired = asyncio.ensure_future(self.context.wait())
        try:
            await asyncio.wait({communicate, expired}, return_when=asyncio.FIRST_COMPLETED)
        except BaseException:
            # The awaiting task was cancelled or interrupted from outside
            self.logger.debug(f"Scan interrupted, killing zmap process {process.pid}")
            await self._kill(process, communicate)
            raise
        finally:
            if not expired.done():
                expired.cancel()

        # A process that finished in the same step as the deadline still wins
        if not communicate.done():
            self.logger.debug(f"Scan context finished, killing zmap process {process.pid}")
            await self._kill(process, communicate)
            raise ScanTimeoutError(self.context.timeout, command=cmd)

        stdout, stderr = communicate.result()
        output = ProcessOutput(
            returncode=process.returncode,
            stdout=stdout.decode('utf-8', errors='ignore'),
            stderr=stderr.decode('utf-8', errors='ignore'),
        )

        if output.returncode != 0:
            self.logger.warning(f"zmap exited with return code {output.returncode}")
        else:
            self.logger.debug("Command finished with return code 0")
        return output

    async def _kill(self, process: asyncio.subprocess.Process,
                    communicate: 'asyncio.Future[Tuple[bytes, bytes]]') -> None:
        """Kill the process if it still runs and reap it."""
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                # exited between the check and the signal
                pass
        communicate.cancel()
        await asyncio.gather(communicate, return_exceptions=True)
        await process.wait()
