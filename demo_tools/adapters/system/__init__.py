"""System info adapter."""

from .client import HostStatsClient, to_megabytes
from .schemas import (
    SYSTEM_INFO_INPUT_SCHEMA,
    CpuInfo,
    FullSystemInfoOutput,
    MemoryInfo,
    SystemInfoOutput,
)
from .tool import SystemInfoTool

__all__ = [
    "HostStatsClient",
    "to_megabytes",
    "SYSTEM_INFO_INPUT_SCHEMA",
    "CpuInfo",
    "FullSystemInfoOutput",
    "MemoryInfo",
    "SystemInfoOutput",
    "SystemInfoTool",
]


def register_system_tools(registry) -> None:
    """Register the system info tool with the tool registry."""
    registry.register(SystemInfoTool())
