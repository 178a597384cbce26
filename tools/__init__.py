# =============================================================================
# tools/__init__.py
# =============================================================================
# The FastMCP layer: tool declarations (mcp_server.py) and the uniform call
# path every tool goes through (dispatch.py).
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP or parse JSON (that's core/)
#   - They do NOT decide which tool to call next (that's the agent's job)
#
# TOOL CONTRACT QUALITY:
#   The docstring of each tool becomes its description in MCP, and the LLM
#   reads it to decide WHEN to call the tool.  Keep them specific.
# =============================================================================
