# =============================================================================
# core/config.py  —  Static Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the handful of settings the adapter needs: where the Instant-System
#   API lives, which network we talk to, and how the MCP server introduces
#   itself to the host.
#
# WHAT IS (AND ISN'T) CONFIGURABLE:
#   The upstream base URL and the network id are FIXED.  This server exists
#   to expose one network (Synchro Bus, Chambéry = network 3), so pointing it
#   elsewhere would make every tool description a lie.
#
#   Only the server identity strings can be overridden from the environment:
#       SYNCHRO_MCP_SERVER_NAME     (default: "synchro-bus-mcp-server")
#       SYNCHRO_MCP_SERVER_VERSION  (default: "1.0.0")
#
#   Entry points call load_dotenv() before importing this module, so a .env
#   file works too.
# =============================================================================

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Read-only settings for the upstream API and the MCP server identity."""

    base_url: str = "https://prod.instant-system.com/InstantCore"
    api_version: str = "v3"
    network_id: int = 3                # Synchro Bus Chambéry
    server_name: str = "synchro-bus-mcp-server"
    server_version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            server_name=os.environ.get("SYNCHRO_MCP_SERVER_NAME", cls.server_name),
            server_version=os.environ.get("SYNCHRO_MCP_SERVER_VERSION", cls.server_version),
        )

    @property
    def network_path(self) -> str:
        """Path prefix shared by every tool, e.g. "/v3/networks/3"."""
        return f"/{self.api_version}/networks/{self.network_id}"


settings = Settings.from_env()
