"""System Info Tool.

Platform, uptime, memory and (optionally) CPU details of the host.
"""

from typing import Any

from demo_tools.base import BaseTool, ToolResult

from .client import HostStatsClient, to_megabytes
from .schemas import (
    SYSTEM_INFO_INPUT_SCHEMA,
    CpuInfo,
    FullSystemInfoOutput,
    MemoryInfo,
    SystemInfoOutput,
)


class SystemInfoTool(BaseTool):
    """Tool for host statistics.

    Read-only; there is no modelled failure path. Also backs the
    file:///system-info resource.
    """

    name = "system_info"
    description = "Get information about the system (platform, CPU, memory, uptime)"
    input_schema = SYSTEM_INFO_INPUT_SCHEMA

    def __init__(self, client: HostStatsClient | None = None):
        self.client = client or HostStatsClient()

    async def execute(self, ctx: dict, arguments: dict[str, Any]) -> ToolResult:
        detail = arguments.get("detail", "basic")

        total, free = self.client.memory()
        basic = SystemInfoOutput(
            platform=self.client.platform(),
            architecture=self.client.architecture(),
            uptime=self.client.uptime_seconds(),
            memory=MemoryInfo(
                total=to_megabytes(total),
                free=to_megabytes(free),
                used=to_megabytes(total - free),
            ),
        )

        if detail == "full":
            output = FullSystemInfoOutput(
                **basic.model_dump(),
                cpus=CpuInfo(
                    count=self.client.cpu_count(),
                    model=self.client.cpu_model(),
                    speed=self.client.cpu_speed_mhz(),
                ),
            )
            return ToolResult(success=True, data=output.model_dump())

        return ToolResult(success=True, data=basic.model_dump())
