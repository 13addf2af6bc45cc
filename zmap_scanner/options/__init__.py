"""zmap command line options.

Each ``with_*`` factory returns an :class:`Option`; applying it validates the
value against the scanner configuration and appends the flag. Options are
grouped like the sections of ``zmap --help``.
"""

from typing import Any, Callable, Dict, List, Mapping

from .base import (
    Option, ToggleOption, TextOption, IntegerOption, parse_integer, parse_port
)
from .basic import (
    CustomArgumentsOption, TargetsOption, TargetPortOption, OutputFileOption,
    ExistingFileOption,
    with_custom_arguments, with_targets, with_target_port, with_output_file,
    with_blacklist_file, with_whitelist_file
)
from .scan import (
    BandwidthOption, MaxTargetsOption,
    with_rate, with_bandwidth, with_max_targets, with_max_runtime,
    with_max_results, with_probes, with_cooldown_time, with_seed, with_retries,
    with_dry_run, with_shards, with_shard
)
from .network import (
    SourcePortOption, SourceIPOption, MACAddressOption, InterfaceOption,
    is_valid_mac,
    with_source_port, with_source_ip, with_gateway_mac, with_source_mac,
    with_interface, with_vpn
)
from .modules import (
    ProbeModuleOption, OutputModuleOption, OutputFieldsOption,
    with_probe_module, with_probe_args, with_output_fields, with_output_module,
    with_output_args, with_output_filter
)
from .logging_options import (
    VerbosityOption, LogFileOption, LogDirectoryOption, WritableFileOption,
    with_verbosity, with_log_file, with_log_directory, with_metadata_file,
    with_status_updates_file, with_quiet, with_disable_syslog, with_notes,
    with_user_metadata
)
from .additional import (
    ConfigFileOption, MinHitrateOption, CoresOption,
    with_config_file, with_max_sendto_failures, with_min_hitrate,
    with_sender_threads, with_cores, with_ignore_invalid_hosts
)
from ..core.exceptions import ConfigurationError
from ..core.scanning.data_structures import BandwidthUnit


OPTION_FACTORIES: Dict[str, Callable[..., Option]] = {
    'custom_arguments': with_custom_arguments,
    'targets': with_targets,
    'target_port': with_target_port,
    'output_file': with_output_file,
    'blacklist_file': with_blacklist_file,
    'whitelist_file': with_whitelist_file,
    'rate': with_rate,
    'bandwidth': with_bandwidth,
    'max_targets': with_max_targets,
    'max_runtime': with_max_runtime,
    'max_results': with_max_results,
    'probes': with_probes,
    'cooldown_time': with_cooldown_time,
    'seed': with_seed,
    'retries': with_retries,
    'dry_run': with_dry_run,
    'shards': with_shards,
    'shard': with_shard,
    'source_port': with_source_port,
    'source_ip': with_source_ip,
    'gateway_mac': with_gateway_mac,
    'source_mac': with_source_mac,
    'interface': with_interface,
    'vpn': with_vpn,
    'probe_module': with_probe_module,
    'probe_args': with_probe_args,
    'output_fields': with_output_fields,
    'output_module': with_output_module,
    'output_args': with_output_args,
    'output_filter': with_output_filter,
    'verbosity': with_verbosity,
    'log_file': with_log_file,
    'log_directory': with_log_directory,
    'metadata_file': with_metadata_file,
    'status_updates_file': with_status_updates_file,
    'quiet': with_quiet,
    'disable_syslog': with_disable_syslog,
    'notes': with_notes,
    'user_metadata': with_user_metadata,
    'config_file': with_config_file,
    'max_sendto_failures': with_max_sendto_failures,
    'min_hitrate': with_min_hitrate,
    'sender_threads': with_sender_threads,
    'cores': with_cores,
    'ignore_invalid_hosts': with_ignore_invalid_hosts,
}

TOGGLE_OPTIONS = {'dry_run', 'vpn', 'quiet', 'disable_syslog', 'ignore_invalid_hosts'}
VARIADIC_OPTIONS = {'targets', 'custom_arguments'}


def _bandwidth_from_value(value: Any) -> BandwidthOption:
    text = str(value)
    if text and text[-1].upper() in {unit.value for unit in BandwidthUnit}:
        return with_bandwidth(text[:-1], text[-1].upper())
    return with_bandwidth(value)


def _max_targets_from_value(value: Any) -> MaxTargetsOption:
    text = str(value)
    if text.endswith("%"):
        return with_max_targets(text[:-1], is_percentage=True)
    return with_max_targets(value)


def options_from_mapping(mapping: Mapping[str, Any]) -> List[Option]:
    """Build options from a configuration mapping.

    Keys are the factory names without the ``with_`` prefix. Toggles take a
    boolean, ``targets`` and ``custom_arguments`` take a list, ``bandwidth``
    accepts ``"10M"`` and ``max_targets`` accepts ``"10%"``.

    Raises:
        ConfigurationError: If a key does not name an option
    """
    options = []
    for key, value in mapping.items():
        if key not in OPTION_FACTORIES:
            raise ConfigurationError(f"unknown scan option: {key}",
                                     config_section='scanner.options', config_key=key)
        factory = OPTION_FACTORIES[key]

        if key in TOGGLE_OPTIONS:
            if value:
                options.append(factory())
        elif key in VARIADIC_OPTIONS:
            values = value if isinstance(value, (list, tuple)) else [value]
            options.append(factory(*values))
        elif key == 'bandwidth':
            options.append(_bandwidth_from_value(value))
        elif key == 'max_targets':
            options.append(_max_targets_from_value(value))
        else:
            options.append(factory(value))
    return options


__all__ = [
    'Option', 'ToggleOption', 'TextOption', 'IntegerOption',
    'parse_integer', 'parse_port', 'is_valid_mac',
    'CustomArgumentsOption', 'TargetsOption', 'TargetPortOption',
    'OutputFileOption', 'ExistingFileOption', 'BandwidthOption',
    'MaxTargetsOption', 'SourcePortOption', 'SourceIPOption',
    'MACAddressOption', 'InterfaceOption', 'ProbeModuleOption',
    'OutputModuleOption', 'OutputFieldsOption', 'VerbosityOption',
    'LogFileOption', 'LogDirectoryOption', 'WritableFileOption',
    'ConfigFileOption', 'MinHitrateOption', 'CoresOption',
    'OPTION_FACTORIES', 'options_from_mapping',
    'with_custom_arguments', 'with_targets', 'with_target_port',
    'with_output_file', 'with_blacklist_file', 'with_whitelist_file',
    'with_rate', 'with_bandwidth', 'with_max_targets', 'with_max_runtime',
    'with_max_results', 'with_probes', 'with_cooldown_time', 'with_seed',
    'with_retries', 'with_dry_run', 'with_shards', 'with_shard',
    'with_source_port', 'with_source_ip', 'with_gateway_mac',
    'with_source_mac', 'with_interface', 'with_vpn',
    'with_probe_module', 'with_probe_args', 'with_output_fields',
    'with_output_module', 'with_output_args', 'with_output_filter',
    'with_verbosity', 'with_log_file', 'with_log_directory',
    'with_metadata_file', 'with_status_updates_file', 'with_quiet',
    'with_disable_syslog', 'with_notes', 'with_user_metadata',
    'with_config_file', 'with_max_sendto_failures', 'with_min_hitrate',
    'with_sender_threads', 'with_cores', 'with_ignore_invalid_hosts'
]
