"""Tests for options validated against the zmap binary's vocabulary."""

from unittest.mock import patch

import pytest

from zmap_scanner.core.exceptions import (
    OptionValidationError, DuplicateOptionError, CapabilityQueryError
)
from zmap_scanner.core.scanning.configuration import ScanConfiguration
from zmap_scanner.options import (
    with_probe_module, with_probe_args, with_output_module, with_output_args,
    with_output_fields, with_output_filter
)
from zmap_scanner.tools import ZMapTool


class TestModuleOptions:
    """Test cases for probe and output module options."""

    def test_probe_module(self, configuration):
        with_probe_module("icmp_echoscan").apply(configuration)
        assert configuration.arguments == ["--probe-module", "icmp_echoscan"]

    def test_unknown_probe_module(self, configuration):
        with pytest.raises(OptionValidationError) as exc_info:
            with_probe_module("dns").apply(configuration)

        assert "tcp_synscan" in exc_info.value.suggestion
        assert len(configuration.arguments) == 0

    def test_output_module(self, configuration):
        with_output_module("csv").apply(configuration)

        assert configuration.arguments == ["--output-module", "csv"]
        with pytest.raises(DuplicateOptionError):
            with_output_module("json").apply(configuration)

    def test_unknown_output_module(self, configuration):
        with pytest.raises(OptionValidationError, match="not in available output modules"):
            with_output_module("redis").apply(configuration)

    def test_free_text_module_arguments(self, offline_configuration):
        with_probe_args("payload").apply(offline_configuration)
        with_output_args("header").apply(offline_configuration)
        with_output_filter("success = 1").apply(offline_configuration)

        assert offline_configuration.arguments == [
            "--probe-args", "payload", "--output-args", "header",
            "--output-filter", "success = 1"
        ]

    def test_module_check_propagates_query_failure(self, offline_configuration):
        failure = CapabilityQueryError("--list-probe-modules", "exit code 1", exit_code=1)
        with patch.object(ZMapTool, 'list_probe_modules', side_effect=failure):
            with pytest.raises(CapabilityQueryError):
                with_probe_module("tcp_synscan").apply(offline_configuration)

        assert len(offline_configuration.arguments) == 0


class TestOutputFields:
    """Test cases for the output fields option."""

    def test_list_of_fields(self, configuration):
        with_output_fields(["saddr", "sport"]).apply(configuration)
        assert configuration.arguments == ["--output-fields", "saddr,sport"]

    def test_comma_separated_fields(self, configuration):
        with_output_fields("saddr,daddr").apply(configuration)
        assert configuration.arguments == ["--output-fields", "saddr,daddr"]

    def test_unknown_field(self, configuration):
        with pytest.raises(OptionValidationError, match="ttl is not in available fields"):
            with_output_fields(["saddr", "ttl"]).apply(configuration)
        assert len(configuration.arguments) == 0

    def test_empty_fields(self, configuration):
        with pytest.raises(OptionValidationError, match="at least one output field"):
            with_output_fields([]).apply(configuration)

    def test_fields_checked_against_each_binary(self, fake_zmap):
        first = ScanConfiguration(tool=ZMapTool(fake_zmap))
        second = ScanConfiguration(tool=ZMapTool(fake_zmap))

        with_output_fields(["saddr"]).apply(first)
        with_output_fields(["sport"]).apply(second)

        assert first.arguments == ["--output-fields", "saddr"]
        assert second.arguments == ["--output-fields", "sport"]
