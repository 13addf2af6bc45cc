"""Tests for binary discovery and capability introspection."""

import os
from unittest.mock import patch

import pytest

from zmap_scanner.core.exceptions import (
    BinaryNotFoundError, InvalidBinaryError, CapabilityQueryError
)
from zmap_scanner.core.scanning import OutputField
from zmap_scanner.tools import (
    ZMapTool, ExternalTool, parse_line_list, parse_output_fields, parse_version
)


class TestParsers:
    """Test cases for the metadata output parsers."""

    def test_parse_output_field(self):
        assert parse_output_fields("saddr TEXT source IP address\n") == [
            OutputField("saddr", "TEXT", "source IP address")
        ]

    def test_parse_output_fields_type_colon(self):
        fields = parse_output_fields("classification: string: packet classification\n"
                                     "success bool\n")

        assert fields[0] == OutputField("classification:", "string", "packet classification")
        assert fields[1] == OutputField("success", "bool", "")

    def test_parse_output_fields_skips_blank_lines(self):
        assert len(parse_output_fields("\nsaddr TEXT a\n   \nsport INT b\n")) == 2

    def test_parse_output_fields_rejects_name_only(self):
        with pytest.raises(CapabilityQueryError):
            parse_output_fields("saddr\n")

    def test_parse_line_list(self):
        assert parse_line_list("tcp_synscan\nicmp_echoscan\n\nudp\n") == [
            "tcp_synscan", "icmp_echoscan", "udp"
        ]
        assert parse_line_list("") == []

    def test_parse_version(self):
        assert parse_version("zmap 2.1.1\n") == "2.1.1"
        assert parse_version("zmap 3.0.0 (built with ...)\n") == "3.0.0 (built with ...)"
        assert parse_version("nmap 7.94\n") is None


class TestZMapTool:
    """Test cases for ZMapTool against the fake binary."""

    def test_locate_explicit_binary(self, fake_zmap):
        tool = ZMapTool.locate(fake_zmap)

        assert tool.binary_path == fake_zmap
        assert isinstance(tool, ExternalTool)

    def test_locate_on_path(self, fake_zmap, monkeypatch):
        monkeypatch.setenv('PATH', os.path.dirname(fake_zmap))
        assert ZMapTool.locate().binary_path == fake_zmap

    def test_locate_missing_on_path(self, temp_dir, monkeypatch):
        monkeypatch.setenv('PATH', str(temp_dir))
        with pytest.raises(BinaryNotFoundError):
            ZMapTool.locate()

    def test_locate_missing_path(self, temp_dir):
        with pytest.raises(BinaryNotFoundError) as exc_info:
            ZMapTool.locate(str(temp_dir / 'zmap'))
        assert exc_info.value.binary_path == str(temp_dir / 'zmap')

    def test_locate_not_zmap(self, temp_dir, fake_zmap):
        impostor = temp_dir / 'bin' / 'impostor'
        impostor.write_text("#!/bin/sh\necho 'nmap 7.94'\n")
        impostor.chmod(0o755)

        with pytest.raises(InvalidBinaryError) as exc_info:
            ZMapTool.locate(str(impostor))
        assert exc_info.value.version_output == 'nmap 7.94'

    def test_locate_not_executable(self, temp_dir):
        data_file = temp_dir / 'zmap.txt'
        data_file.write_text("zmap")

        with pytest.raises(InvalidBinaryError):
            ZMapTool.locate(str(data_file))

    def test_capabilities(self, zmap_tool):
        assert zmap_tool.get_version() == "2.1.1"
        assert zmap_tool.list_probe_modules() == ["tcp_synscan", "icmp_echoscan", "udp"]
        assert zmap_tool.list_output_modules() == ["csv", "json"]
        assert [field.name for field in zmap_tool.list_output_fields()] == [
            "saddr", "sport", "daddr"
        ]

    def test_query_nonzero_exit(self, temp_dir, fake_zmap):
        failing = temp_dir / 'failing'
        failing.write_text("#!/bin/sh\necho 'permission denied' >&2\nexit 3\n")
        failing.chmod(0o755)

        with pytest.raises(CapabilityQueryError) as exc_info:
            ZMapTool(str(failing)).list_output_modules()

        assert exc_info.value.exit_code == 3
        assert exc_info.value.stderr == "permission denied\n"

    def test_query_start_failure(self):
        with patch('subprocess.run', side_effect=OSError("exec format error")):
            with pytest.raises(CapabilityQueryError, match="exec format error"):
                ZMapTool('/usr/sbin/zmap').list_probe_modules()

    def test_queries_are_not_cached(self, zmap_tool):
        with patch.object(zmap_tool, '_run_command', wraps=zmap_tool._run_command) as run:
            zmap_tool.list_probe_modules()
            zmap_tool.list_probe_modules()

        assert run.call_count == 2
