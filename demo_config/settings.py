"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

Every variable is optional; an MCP client normally launches the server with
no environment at all, so the defaults must produce a working server.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings documented in .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # SERVER IDENTITY
    # ========================================================================
    SERVER_NAME: str = Field(default="mcp-server-demo", description="Name advertised in serverInfo")
    SERVER_VERSION: str = Field(default="1.0.0", description="Version advertised in serverInfo")
    PROTOCOL_VERSION: str = Field(
        default="2024-11-05",
        description="Protocol version answered when the client asks for an unknown one",
    )
    SUPPORTED_PROTOCOL_VERSIONS: str = Field(
        default="2024-11-05,2025-03-26,2025-06-18",
        description="Comma-separated protocol versions echoed back to the client",
    )

    # ========================================================================
    # WORKSPACE
    # ========================================================================
    WORKSPACE_ROOT: str = Field(
        default="",
        description="Root directory for file_operations (empty = process cwd)",
    )

    # ========================================================================
    # TRANSPORT
    # ========================================================================
    TRANSPORT_MAX_LINE_BYTES: int = Field(
        default=16 * 1024 * 1024,
        ge=1024,
        description="Largest inbound JSON-RPC line accepted from stdin",
    )

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # GOOGLE ADK (Optional usage analytics)
    # ========================================================================
    # Kept as a raw string: only the exact value "true" turns the integration on.
    GOOGLE_ADK_ENABLED: str = Field(default="false", description="Set to 'true' to record tool usage")
    USAGE_RECENT_CALLS: int = Field(default=10, ge=0, description="Recent calls returned by usage stats")

    @property
    def usage_analytics_enabled(self) -> bool:
        return self.GOOGLE_ADK_ENABLED == "true"

    @property
    def supported_protocol_versions(self) -> list[str]:
        versions = [v.strip() for v in self.SUPPORTED_PROTOCOL_VERSIONS.split(",") if v.strip()]
        if self.PROTOCOL_VERSION not in versions:
            versions.append(self.PROTOCOL_VERSION)
        return versions
