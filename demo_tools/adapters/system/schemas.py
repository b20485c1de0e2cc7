"""System info adapter schemas."""

from pydantic import BaseModel, Field

from demo_tools.base import InputSchema, SchemaProperty

DETAIL_LEVELS = ("basic", "full")


SYSTEM_INFO_INPUT_SCHEMA = InputSchema(
    properties={
        "detail": SchemaProperty(
            type="string",
            enum=list(DETAIL_LEVELS),
            description="Level of detail (basic or full)",
        ),
    },
    required=[],
)


class MemoryInfo(BaseModel):
    """Memory totals in megabytes."""

    total: int
    free: int
    used: int


class CpuInfo(BaseModel):
    """First-core CPU description."""

    count: int
    model: str | None = None
    speed: int | None = Field(None, description="Clock speed in MHz")


class SystemInfoOutput(BaseModel):
    """Output schema for SystemInfoTool (basic detail)."""

    platform: str
    architecture: str
    uptime: int = Field(..., description="Host uptime in whole seconds")
    memory: MemoryInfo


class FullSystemInfoOutput(SystemInfoOutput):
    """Output schema for SystemInfoTool (full detail)."""

    cpus: CpuInfo
