# =============================================================================
# agent/transit_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the agent that answers transit questions.  The agent itself has
#   no data access: every fact comes from the MCP tool server in
#   tools/mcp_server.py.
#
#   ┌──────────────────────────────────────────────┐
#   │               Google ADK Agent               │
#   │  system prompt ──▶ LLM (LiteLlm) ──▶ tools   │
#   └──────────────────────────────────────────────┘
#                                           │ stdio
#                                           ▼
#                              ┌───────────────────────┐
#                              │  FastMCP Server       │
#                              │  (tools/mcp_server)   │
#                              └───────────┬───────────┘
#                                          │ HTTPS GET
#                                          ▼
#                                Instant-System API
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess with the SAME interpreter we are
#   running under, as a module (`-m tools.mcp_server`) from the project root,
#   so `core` and `tools` resolve no matter where main.py was launched from.
#
# MODEL:
#   Any LiteLlm model string works.  The default routes GPT-4o through
#   OpenRouter (reads OPENROUTER_API_KEY); override with TRANSIT_AGENT_MODEL.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset, StdioServerParameters

from agent.prompt import get_transit_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent() -> Agent:
    """Create the Synchro Bus transit assistant.

    Returns:
        A configured Google ADK Agent whose only tools are the ones exposed
        by our FastMCP server.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    model = os.environ.get("TRANSIT_AGENT_MODEL", DEFAULT_MODEL)

    return Agent(
        name="synchro_bus_assistant",
        model=LiteLlm(model=model),
        instruction=get_transit_assistant_prompt(),
        tools=[mcp_tools],
    )
