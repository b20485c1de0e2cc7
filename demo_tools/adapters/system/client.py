"""Host statistics client.

Thin wrapper over psutil and the platform module so the tool can be tested
with a mocked host.
"""

import math
import platform
import sys
import time
from pathlib import Path

import psutil

_BYTES_PER_MB = 1024 * 1024
_CPUINFO = Path("/proc/cpuinfo")


def to_megabytes(value: int) -> int:
    return math.floor(value / _BYTES_PER_MB + 0.5)


class HostStatsClient:
    """Reads platform, uptime, memory and CPU details of the local host."""

    def platform(self) -> str:
        return sys.platform

    def architecture(self) -> str:
        return platform.machine()

    def uptime_seconds(self) -> int:
        return int(time.time() - psutil.boot_time())

    def memory(self) -> tuple[int, int]:
        """Return (total, free) in bytes."""
        vm = psutil.virtual_memory()
        return vm.total, vm.available

    def cpu_count(self) -> int:
        return psutil.cpu_count(logical=True) or 0

    def cpu_model(self) -> str | None:
        if _CPUINFO.is_file():
            for line in _CPUINFO.read_text(errors="replace").splitlines():
                key, _, value = line.partition(":")
                if key.strip() == "model name":
                    return value.strip()
        return platform.processor() or None

    def cpu_speed_mhz(self) -> int | None:
        freq = psutil.cpu_freq() if hasattr(psutil, "cpu_freq") else None
        if not freq or not freq.current:
            return None
        return round(freq.current)
