# =============================================================================
# main.py  —  Interactive Synchro Bus Assistant
# =============================================================================
#
# HOW TO RUN:
#   pip install -e ".[agent]"
#   python main.py
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/transit_agent.py), which spawns
#      the FastMCP tool server as a stdio subprocess
#   2. Opens an in-memory session
#   3. Reads questions from the terminal and streams them to the agent
#   4. Prints each tool the agent calls, then its final answer
#
# The MCP server can also be used WITHOUT this loop: point any MCP host
# (Claude Desktop, an IDE, another agent) at `python -m tools.mcp_server`.
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Load environment variables from .env (OPENROUTER_API_KEY, TRANSIT_AGENT_MODEL,
# SYNCHRO_MCP_SERVER_NAME...) BEFORE creating the agent: LiteLlm reads the
# provider key from the environment when it initializes.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.transit_agent import create_agent

APP_NAME = "synchro_bus_assistant"
USER_ID = "local_user"


async def run_agent():
    """Run the transit assistant in a read-eval-print loop."""
    print("=" * 70)
    print("  SYNCHRO BUS ASSISTANT")
    print("  Powered by Google ADK + FastMCP + Instant-System")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about lines, stops, departures or disruptions in Chambéry.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
