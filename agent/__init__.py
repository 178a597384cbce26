# =============================================================================
# agent/__init__.py
# =============================================================================
# Optional agent host (install with the "agent" extra).
#
# A Google ADK agent that launches tools/mcp_server.py as a subprocess and
# lets an LLM answer transit questions with it.  It holds no business logic:
# the prompt says how to use the tools, the tools say what is true.
# =============================================================================
