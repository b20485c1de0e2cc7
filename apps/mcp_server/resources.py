"""Readable resources.

Resources are views over tool execution: nothing is stored, content is
computed when a client reads the URI.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from demo_tools.adapters.system import SystemInfoTool

SYSTEM_INFO_URI = "file:///system-info"


class ResourceNotFoundError(LookupError):
    """No resource is published under the requested URI."""

    def __init__(self, uri: str):
        super().__init__(f'Resource "{uri}" not found')
        self.uri = uri


class Resource(BaseModel):
    """Resource descriptor returned by resources/list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    name: str
    description: str
    mime_type: str = Field(..., alias="mimeType")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


SYSTEM_INFO_RESOURCE = Resource(
    uri=SYSTEM_INFO_URI,
    name="System Information",
    description="Current system information",
    mime_type="application/json",
)


class ResourceCatalog:
    """Static resource list backed by the system info tool."""

    def __init__(self, system_info: SystemInfoTool | None = None):
        self.system_info = system_info or SystemInfoTool()
        self._resources = [SYSTEM_INFO_RESOURCE]

    async def read(self, uri: str) -> list[dict[str, Any]]:
        """Compute the contents of a resource.

        Returns:
            MCP `contents` list with a single text item

        Raises:
            ResourceNotFoundError: Unknown URI
        """
        if uri != SYSTEM_INFO_URI:
            raise ResourceNotFoundError(uri)

        result = await self.system_info.execute({}, {"detail": "basic"})
        return [
            {
                "uri": uri,
                "mimeType": SYSTEM_INFO_RESOURCE.mime_type,
                "text": json.dumps(result.data, indent=2),
            }
        ]

    # Last in the class body: past this point `list` names the method.
    def list(self) -> list[Resource]:
        return list(self._resources)
