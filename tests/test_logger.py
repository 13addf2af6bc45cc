"""Tests for logging setup and the JSON formatter."""

import json
import logging
import logging.handlers
import sys

import pytest

from zmap_scanner.core.exceptions import ScanTimeoutError
from zmap_scanner.core.logger import LoggerManager, StructuredFormatter


@pytest.fixture
def logger_manager(test_config):
    manager = LoggerManager(test_config)
    yield manager
    manager.shutdown()


def _record(message='zmap started', exc_info=None, **extra):
    record = logging.LogRecord(
        name='zmap_scanner.scanner', level=logging.INFO, pathname=__file__,
        lineno=10, msg=message, args=(), exc_info=exc_info
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggerManager:
    """Test cases for LoggerManager."""

    def test_configures_package_logger(self, logger_manager):
        root = logging.getLogger('zmap_scanner')

        assert root.level == logging.ERROR
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_production_uses_structured_console(self, test_config):
        test_config['system']['environment'] = 'production'
        manager = LoggerManager(test_config)
        try:
            handler = logging.getLogger('zmap_scanner').handlers[0]
            assert isinstance(handler.formatter, StructuredFormatter)
        finally:
            manager.shutdown()

    def test_file_handler_when_logs_dir_set(self, test_config, temp_dir):
        test_config['system']['logs_dir'] = str(temp_dir / 'logs')
        test_config['logging']['file_rotation'] = True
        manager = LoggerManager(test_config)
        try:
            handlers = logging.getLogger('zmap_scanner').handlers
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)

            manager.get_logger('scanner').error("scan failed")
            for handler in handlers:
                handler.flush()

            lines = (temp_dir / 'logs' / 'zmap_scanner.log').read_text().splitlines()
            assert json.loads(lines[-1])['message'] == "scan failed"
        finally:
            manager.shutdown()

    def test_repeated_setup_does_not_stack_handlers(self, test_config):
        first = LoggerManager(test_config)
        second = LoggerManager(test_config)
        try:
            assert len(logging.getLogger('zmap_scanner').handlers) == 1
        finally:
            first.shutdown()
            second.shutdown()

    def test_get_logger(self, logger_manager):
        logger = logger_manager.get_logger('orchestrator')

        assert logger.name == 'zmap_scanner.orchestrator'
        assert logger_manager.get_logger('orchestrator') is logger
        assert logger_manager.get_logger() is logging.getLogger('zmap_scanner')

    def test_set_level(self, logger_manager):
        logger_manager.set_level('debug')

        root = logging.getLogger('zmap_scanner')
        assert root.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in root.handlers)

    def test_parse_size(self, logger_manager):
        assert logger_manager._parse_size('1KB') == 1024
        assert logger_manager._parse_size('10MB') == 10 * 1024 * 1024
        assert logger_manager._parse_size('2GB') == 2 * 1024 * 1024 * 1024
        assert logger_manager._parse_size('100B') == 100
        assert logger_manager._parse_size('lots') == 10 * 1024 * 1024

    def test_shutdown_removes_handlers(self, test_config):
        manager = LoggerManager(test_config)
        manager.shutdown()

        assert logging.getLogger('zmap_scanner').handlers == []


class TestStructuredFormatter:
    """Test cases for StructuredFormatter."""

    def test_format_basic_record(self):
        data = json.loads(StructuredFormatter().format(_record()))

        assert data['message'] == 'zmap started'
        assert data['level'] == 'INFO'
        assert data['logger'] == 'zmap_scanner.scanner'
        assert 'extra' not in data

    def test_extra_fields(self):
        data = json.loads(StructuredFormatter().format(
            _record(binary_path='/usr/sbin/zmap', plan=object())
        ))

        assert data['extra']['binary_path'] == '/usr/sbin/zmap'
        assert data['extra']['plan'].startswith('<object object')

    def test_extra_fields_disabled(self):
        data = json.loads(StructuredFormatter(include_extra=False).format(
            _record(binary_path='/usr/sbin/zmap')
        ))

        assert 'extra' not in data

    def test_package_exception_rendered(self):
        try:
            raise ScanTimeoutError(5)
        except ScanTimeoutError:
            record = _record('scan aborted', exc_info=sys.exc_info())

        data = json.loads(StructuredFormatter().format(record))

        assert 'ScanTimeoutError' in data['exception']
        assert data['error']['error_code'] == 'SCAN_TIMEOUT'
        assert data['error']['details']['timeout_seconds'] == 5
