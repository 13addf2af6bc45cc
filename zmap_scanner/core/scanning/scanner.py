"""Blocking and asynchronous zmap scanners."""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Tuple

from .configuration import ScanConfiguration
from .context import ScanContext
from .data_structures import LogEntry, LogLevel, OutputField, ResultRecord, ScanRun
from .interpreter import OutputInterpreter
from .orchestrator import ScanOrchestrator
from ..exceptions import ScanError, ScanInProgressError
from ...options import Option, options_from_mapping
from ...tools.zmap_tool import ZMapTool


class BaseScanner:
    """Shared state and scan routine of both scanner flavours.

    A scanner owns one resolved zmap binary, one argument list and one
    :class:`ScanContext`. Options are applied one by one and validated
    immediately; a rejected option leaves the arguments untouched.
    """

    def __init__(self, binary_path: Optional[str] = None,
                 context: Optional[ScanContext] = None):
        """Initialize scanner.

        Args:
            binary_path: Explicit zmap executable, searched on PATH when omitted
            context: Cancellation signal shared by all runs of this scanner

        Raises:
            BinaryNotFoundError: If zmap cannot be found
            InvalidBinaryError: If ``binary_path`` is not a zmap binary
        """
        tool = ZMapTool.locate(binary_path)
        self.configuration = ScanConfiguration(
            tool=tool,
            context=context if context is not None else ScanContext.background()
        )
        self.orchestrator = ScanOrchestrator(tool, self.configuration.context)
        self.interpreter = OutputInterpreter()
        self.logger = logging.getLogger('zmap_scanner.scanner')

        self.logger.debug(f"Using zmap binary {tool.binary_path}")

    @classmethod
    def from_config(cls, config_manager) -> 'BaseScanner':
        """Create a scanner from the ``scanner`` configuration section.

        Args:
            config_manager: ConfigManager providing ``scanner.binary_path``,
                ``scanner.timeout`` and ``scanner.options``

        Raises:
            ConfigurationError: If an option key is unknown
            OptionValidationError: If an option value is rejected
        """
        timeout = config_manager.get('scanner.timeout')
        scanner = cls(
            binary_path=config_manager.get('scanner.binary_path'),
            context=ScanContext(timeout) if timeout else ScanContext.background()
        )
        scanner.add_options(*options_from_mapping(config_manager.get('scanner.options') or {}))
        return scanner

    @property
    def tool(self) -> ZMapTool:
        return self.configuration.tool

    @property
    def context(self) -> ScanContext:
        return self.configuration.context

    @property
    def arguments(self) -> List[str]:
        """Arguments applied so far, without the defaults added at run time."""
        return self.configuration.arguments.to_list()

    def add_options(self, *options: Option) -> 'BaseScanner':
        """Validate and apply options in order.

        Stops at the first rejected option; options applied before it stay.

        Raises:
            OptionValidationError: If an option is rejected
        """
        for option in options:
            option.apply(self.configuration)
            self.logger.debug(f"Applied {option!r}")
        return self

    def list_probe_modules(self) -> List[str]:
        return self.tool.list_probe_modules()

    def list_output_modules(self) -> List[str]:
        return self.tool.list_output_modules()

    def list_output_fields(self) -> List[OutputField]:
        return self.tool.list_output_fields()

    def get_version(self) -> str:
        return self.tool.get_version()

    async def run(self) -> ScanRun:
        """Run zmap once and interpret its output.

        Returns:
            ScanRun with the parsed results and log entries

        Raises:
            ScanTimeoutError: If the context finished before zmap exited
            ScanExecutionError: If zmap cannot be started
            OutputInterpretationError: If logs or results cannot be parsed
        """
        plan = self.orchestrator.prepare(self.configuration.arguments)
        output = await self.orchestrator.execute(plan)
        scan_run = self.interpreter.interpret(plan, output)

        self.logger.info(
            f"Scan finished with return code {scan_run.returncode}: "
            f"{len(scan_run.results)} results, {len(scan_run.fatals)} fatal log entries"
        )
        return scan_run

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(binary_path='{self.tool.binary_path}', "
                f"arguments={self.arguments!r})")


class BlockingScanner(BaseScanner):
    """Scanner whose runs block the calling thread."""

    def run_blocking(self) -> Tuple[List[ResultRecord], List[LogEntry], List[LogEntry],
                                    List[LogEntry], List[LogEntry], List[LogEntry]]:
        """Run zmap and wait for it to finish.

        Must not be called from a running event loop; await :meth:`run` there.

        Returns:
            Tuple of (results, traces, debugs, warnings, infos, fatals)
        """
        return asyncio.run(self.run()).as_tuple()


class AsyncScanner(BaseScanner):
    """Scanner that runs zmap on a background worker.

    Results become visible only once a run completed successfully; until
    then, and after a failed run, every getter returns an empty list.
    """

    def __init__(self, binary_path: Optional[str] = None,
                 context: Optional[ScanContext] = None):
        super().__init__(binary_path, context)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='zmap-scan')
        self._pending: Optional['Future[ScanRun]'] = None

    def run_async(self) -> 'Future[ScanRun]':
        """Start a run in the background and return immediately.

        Raises:
            ScanInProgressError: If the previous run has not finished
        """
        if self._pending is not None and not self._pending.done():
            raise ScanInProgressError()

        self.logger.debug("Submitting asynchronous scan")
        self._pending = self._executor.submit(self._run_in_worker)
        return self._pending

    def _run_in_worker(self) -> ScanRun:
        return asyncio.run(self.run())

    def wait(self, timeout: Optional[float] = None) -> ScanRun:
        """Block until the current run finished.

        Args:
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            The published ScanRun

        Raises:
            ScanError: If no run was started
            concurrent.futures.TimeoutError: If ``timeout`` elapsed first
            ZMapScannerError: The error that ended the run
        """
        if self._pending is None:
            raise ScanError("no asynchronous scan was started",
                            suggestion="Call run_async() first")
        return self._pending.result(timeout)

    @property
    def running(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def cancel(self) -> None:
        """Cancel the scanner's context, killing a running zmap process."""
        self.context.cancel()

    def shutdown(self) -> None:
        """Release the background worker after the current run finished."""
        self._executor.shutdown(wait=True)

    def _published(self) -> Optional[ScanRun]:
        if self._pending is None or not self._pending.done():
            return None
        if self._pending.cancelled() or self._pending.exception() is not None:
            return None
        return self._pending.result()

    def _published_logs(self, level: LogLevel) -> List[LogEntry]:
        scan_run = self._published()
        return scan_run.logs(level) if scan_run is not None else []

    def get_results(self) -> List[ResultRecord]:
        scan_run = self._published()
        if scan_run is None:
            return []
        return [dict(record) for record in scan_run.results]

    def get_trace_messages(self) -> List[LogEntry]:
        return self._published_logs(LogLevel.TRACE)

    def get_debug_messages(self) -> List[LogEntry]:
        return self._published_logs(LogLevel.DEBUG)

    def get_warning_messages(self) -> List[LogEntry]:
        return self._published_logs(LogLevel.WARN)

    def get_info_messages(self) -> List[LogEntry]:
        return self._published_logs(LogLevel.INFO)

    def get_fatal_messages(self) -> List[LogEntry]:
        return self._published_logs(LogLevel.FATAL)
