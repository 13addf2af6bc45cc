"""Test configuration and utilities for the zmap_scanner test suite."""

import sys
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Any
import pytest

from zmap_scanner.core.scanning.configuration import ScanConfiguration
from zmap_scanner.tools import ZMapTool


# Stand-in for the zmap binary. Answers the metadata queries and emulates
# the output framing, log destinations and exit behaviour of a scan.
# FAKE_ZMAP_SLEEP makes the scan hang, FAKE_ZMAP_EXIT sets the exit code,
# FAKE_ZMAP_RESULTS sets the number of result rows.
FAKE_ZMAP_SCRIPT = r'''#!/bin/sh
case "$1" in
    --version) echo "zmap 2.1.1"; exit 0 ;;
    --list-probe-modules) printf 'tcp_synscan\nicmp_echoscan\nudp\n'; exit 0 ;;
    --list-output-modules) printf 'csv\njson\n'; exit 0 ;;
    --list-output-fields)
        printf 'saddr TEXT source IP address\n'
        printf 'sport INT source port\n'
        printf 'daddr TEXT destination IP address\n'
        exit 0 ;;
esac

dryrun=0
fields=""
outfile=""
logfile=""
logdir=""
while [ $# -gt 0 ]; do
    case "$1" in
        --dryrun) dryrun=1 ;;
        --output-fields) shift; fields="$1" ;;
        --output-file) shift; outfile="$1" ;;
        --log-file) shift; logfile="$1" ;;
        --log-directory) shift; logdir="$1" ;;
    esac
    shift
done

log() {
    line="Jan 02 15:04:05.000 [$1] zmap: $2"
    if [ -n "$logfile" ]; then
        echo "$line" >> "$logfile"
    elif [ -n "$logdir" ]; then
        echo "$line" >> "$logdir/zmap-2024-01-02T150405+0000.log"
    else
        echo "$line" >&2
    fi
}

emit() {
    case "$fields" in
        *,*) echo "$fields" ;;
    esac
    i=1
    while [ "$i" -le "${FAKE_ZMAP_RESULTS:-2}" ]; do
        row=""
        old_ifs=$IFS
        IFS=','
        for field in $fields; do
            case "$field" in
                saddr) value="10.0.0.$i" ;;
                sport) value="80" ;;
                daddr) value="192.168.1.1" ;;
                *) value="x" ;;
            esac
            if [ -z "$row" ]; then row="$value"; else row="$row,$value"; fi
        done
        IFS=$old_ifs
        echo "$row"
        i=$((i + 1))
    done
}

log DEBUG "recv: thread started"
log INFO "started"
echo "0:00 0%; send: 0 0 p/s; recv: 0 0 p/s" >&2

if [ -n "$FAKE_ZMAP_SLEEP" ]; then
    echo "10.0.0.99"
    exec sleep "$FAKE_ZMAP_SLEEP"
fi

if [ "$dryrun" = 1 ]; then
    echo "ip 10.0.0.1 > 192.168.1.1 tcp 80 SYN"
elif [ -n "$outfile" ] && [ "$outfile" != "-" ]; then
    emit > "$outfile"
else
    emit
fi

if [ -n "$FAKE_ZMAP_EXIT" ] && [ "$FAKE_ZMAP_EXIT" != 0 ]; then
    log FATAL "send: could not open raw socket"
    exit "$FAKE_ZMAP_EXIT"
fi

log WARN "no blacklist file specified"
log INFO "completed"
exit 0
'''


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Basic test configuration."""
    return {
        'system': {
            'environment': 'testing',
            'logs_dir': None
        },
        'scanner': {
            'binary_path': None,
            'timeout': 30,
            'options': {
                'targets': ['10.0.0.0/30'],
                'target_port': 80,
                'rate': 100,
                'dry_run': True
            }
        },
        'logging': {
            'level': 'ERROR',  # Reduce noise in tests
            'format': '%(message)s',
            'file_rotation': False,
            'max_file_size': '1MB',
            'backup_count': 1
        }
    }


@pytest.fixture
def config_file(temp_dir, test_config):
    """Create temporary configuration file."""
    import yaml

    config_file = temp_dir / 'test_config.yml'
    with open(config_file, 'w') as f:
        yaml.dump(test_config, f)

    return config_file


@pytest.fixture
def fake_zmap(temp_dir) -> str:
    """Path of an executable emulating zmap."""
    if sys.platform.startswith('win'):
        pytest.skip("fake zmap binary is a POSIX shell script")

    path = temp_dir / 'bin' / 'zmap'
    path.parent.mkdir()
    path.write_text(FAKE_ZMAP_SCRIPT)
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def zmap_tool(fake_zmap) -> ZMapTool:
    return ZMapTool(fake_zmap)


@pytest.fixture
def configuration(zmap_tool) -> ScanConfiguration:
    """Fresh scan configuration around the fake binary."""
    return ScanConfiguration(tool=zmap_tool)


@pytest.fixture
def offline_configuration() -> ScanConfiguration:
    """Scan configuration for options that never run the binary."""
    return ScanConfiguration(tool=ZMapTool('/usr/sbin/zmap'))
