"""Tests for basic and scan options."""

import pytest

from zmap_scanner.core.exceptions import OptionValidationError, DuplicateOptionError
from zmap_scanner.core.scanning import BandwidthUnit
from zmap_scanner.options import (
    with_custom_arguments, with_targets, with_target_port, with_output_file,
    with_blacklist_file, with_whitelist_file, with_rate, with_bandwidth,
    with_max_targets, with_max_runtime, with_max_results, with_probes,
    with_cooldown_time, with_seed, with_retries, with_dry_run, with_shards,
    with_shard
)


class TestNumericOptions:
    """Integer-valued flags accept ints and digit strings only."""

    @pytest.mark.parametrize("factory,flag", [
        (with_rate, "--rate"),
        (with_max_runtime, "--max-runtime"),
        (with_max_results, "--max-results"),
        (with_probes, "--probes"),
        (with_cooldown_time, "--cooldown-time"),
        (with_seed, "--seed"),
        (with_retries, "--retries"),
        (with_shards, "--shards"),
        (with_shard, "--shard"),
    ])
    def test_accepts_integer(self, offline_configuration, factory, flag):
        factory(10).apply(offline_configuration)
        assert offline_configuration.arguments == [flag, "10"]

    @pytest.mark.parametrize("value", ["fast", "10.5", "", " 10", True, 1.5, None])
    def test_rejects_non_numeric_without_mutation(self, offline_configuration, value):
        with pytest.raises(OptionValidationError) as exc_info:
            with_rate(value).apply(offline_configuration)

        assert exc_info.value.flag == "--rate"
        assert len(offline_configuration.arguments) == 0

    def test_accepts_numeric_string(self, offline_configuration):
        with_rate("+100").apply(offline_configuration)
        assert offline_configuration.arguments == ["--rate", "+100"]

    def test_duplicate_rejected(self, offline_configuration):
        with_rate(100).apply(offline_configuration)

        with pytest.raises(DuplicateOptionError):
            with_rate(200).apply(offline_configuration)

        assert offline_configuration.arguments == ["--rate", "100"]

    def test_bandwidth_units(self, offline_configuration):
        with_bandwidth(10, BandwidthUnit.MBPS).apply(offline_configuration)
        assert offline_configuration.arguments == ["--bandwidth", "10M"]

    def test_bandwidth_bits_have_no_suffix(self, offline_configuration):
        with_bandwidth("512").apply(offline_configuration)
        assert offline_configuration.arguments == ["--bandwidth", "512"]

    def test_bandwidth_unknown_unit(self, offline_configuration):
        with pytest.raises(OptionValidationError, match="unsupported"):
            with_bandwidth(10, "T").apply(offline_configuration)
        assert len(offline_configuration.arguments) == 0

    def test_max_targets_percentage(self, offline_configuration):
        with_max_targets(10, is_percentage=True).apply(offline_configuration)
        assert offline_configuration.arguments == ["--max-targets", "10%"]

    def test_max_targets_absolute(self, offline_configuration):
        with_max_targets("5000").apply(offline_configuration)
        assert offline_configuration.arguments == ["--max-targets", "5000"]

    def test_dry_run_toggle(self, offline_configuration):
        with_dry_run().apply(offline_configuration)

        assert offline_configuration.arguments == ["--dryrun"]
        with pytest.raises(DuplicateOptionError):
            with_dry_run().apply(offline_configuration)


class TestTargetOptions:
    """Test cases for targets and target port."""

    def test_targets_are_normalized(self, offline_configuration):
        with_targets("10.0.0.1", "10.0.0.7/24").apply(offline_configuration)
        assert offline_configuration.arguments == ["10.0.0.1", "10.0.0.0/24"]

    def test_targets_can_be_added_repeatedly(self, offline_configuration):
        with_targets("10.0.0.1").apply(offline_configuration)
        with_targets("10.0.0.2").apply(offline_configuration)
        assert offline_configuration.arguments == ["10.0.0.1", "10.0.0.2"]

    @pytest.mark.parametrize("target", ["example.com", "10.0.0.256", "::1", "10.0.0.0/33"])
    def test_invalid_targets(self, offline_configuration, target):
        with pytest.raises(OptionValidationError):
            with_targets("10.0.0.1", target).apply(offline_configuration)
        assert len(offline_configuration.arguments) == 0

    def test_targets_required(self, offline_configuration):
        with pytest.raises(OptionValidationError, match="at least one target"):
            with_targets().apply(offline_configuration)

    @pytest.mark.parametrize("port", [0, 80, "443", 65535])
    def test_target_port_in_range(self, offline_configuration, port):
        with_target_port(port).apply(offline_configuration)
        assert offline_configuration.arguments == ["--target-port", str(port)]

    @pytest.mark.parametrize("port", [-1, 65536, "http"])
    def test_target_port_out_of_range(self, offline_configuration, port):
        with pytest.raises(OptionValidationError):
            with_target_port(port).apply(offline_configuration)
        assert len(offline_configuration.arguments) == 0


class TestFileOptions:
    """Test cases for output and host list files."""

    def test_output_file(self, offline_configuration, temp_dir):
        path = temp_dir / "results.csv"
        with_output_file(path).apply(offline_configuration)
        assert offline_configuration.arguments == ["--output-file", str(path)]

    def test_output_file_stdout(self, offline_configuration):
        with_output_file("-").apply(offline_configuration)
        assert offline_configuration.arguments == ["--output-file", "-"]

    def test_output_file_is_directory(self, offline_configuration, temp_dir):
        with pytest.raises(OptionValidationError, match="is a directory"):
            with_output_file(temp_dir).apply(offline_configuration)

    def test_output_file_parent_missing(self, offline_configuration, temp_dir):
        with pytest.raises(OptionValidationError, match="parent directory"):
            with_output_file(temp_dir / "missing" / "results.csv").apply(offline_configuration)

    def test_blacklist_and_whitelist(self, offline_configuration, temp_dir):
        blacklist = temp_dir / "blacklist.conf"
        whitelist = temp_dir / "whitelist.conf"
        blacklist.write_text("10.0.0.0/8\n")
        whitelist.write_text("192.168.0.0/16\n")

        with_blacklist_file(blacklist).apply(offline_configuration)
        with_whitelist_file(whitelist).apply(offline_configuration)

        assert offline_configuration.arguments == [
            "--blacklist-file", str(blacklist), "--whitelist-file", str(whitelist)
        ]

    def test_blacklist_must_exist(self, offline_configuration, temp_dir):
        with pytest.raises(OptionValidationError, match="does not exist"):
            with_blacklist_file(temp_dir / "missing.conf").apply(offline_configuration)

    def test_whitelist_must_not_be_directory(self, offline_configuration, temp_dir):
        with pytest.raises(OptionValidationError, match="is a directory"):
            with_whitelist_file(temp_dir).apply(offline_configuration)


class TestCustomArguments:
    """Test cases for the raw argument escape hatch."""

    def test_appended_verbatim(self, offline_configuration):
        with_custom_arguments("--rate", "1", "--rate", "2").apply(offline_configuration)
        assert offline_configuration.arguments == ["--rate", "1", "--rate", "2"]

    def test_custom_flags_still_guard_later_options(self, offline_configuration):
        with_custom_arguments("--rate", "1").apply(offline_configuration)

        with pytest.raises(DuplicateOptionError):
            with_rate(2).apply(offline_configuration)


class TestOptionsFromMapping:
    """Test cases for building options from configuration."""

    def test_builds_in_order(self, offline_configuration):
        from zmap_scanner.options import options_from_mapping

        options = options_from_mapping({
            'targets': ['10.0.0.1', '10.0.1.0/24'],
            'rate': 100,
            'bandwidth': '10m',
            'max_targets': '5%',
            'dry_run': True,
            'quiet': False,
        })
        for option in options:
            option.apply(offline_configuration)

        assert offline_configuration.arguments == [
            "10.0.0.1", "10.0.1.0/24", "--rate", "100", "--bandwidth", "10M",
            "--max-targets", "5%", "--dryrun"
        ]

    def test_single_target_string(self, offline_configuration):
        from zmap_scanner.options import options_from_mapping

        options_from_mapping({'targets': '10.0.0.1'})[0].apply(offline_configuration)
        assert offline_configuration.arguments == ["10.0.0.1"]

    def test_unknown_key(self):
        from zmap_scanner.core.exceptions import ConfigurationError
        from zmap_scanner.options import options_from_mapping

        with pytest.raises(ConfigurationError) as exc_info:
            options_from_mapping({'rate': 1, 'turbo': True})
        assert exc_info.value.config_section == 'scanner.options'
