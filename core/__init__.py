# =============================================================================
# core/__init__.py
# =============================================================================
# The upstream adapter: one async function per tool, each turning a call into
# a single GET against the Instant-System API and the JSON back into a
# ToolResponse.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK or any orchestration
#   framework.  Its only third-party dependency is httpx, so every adapter can
#   be tested with an in-memory transport and no MCP host at all.
# =============================================================================
