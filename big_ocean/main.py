"""CLI entry-point — run the Big Ocean conversation in the terminal.

Usage:
    python -m big_ocean.main
    # or via pyproject entry-point:  interview
"""

from __future__ import annotations

import uuid

from dotenv import load_dotenv
from langgraph.types import Command

from big_ocean.logging_config import setup_logging
from big_ocean.models.initial_state import new_assessment_state
from big_ocean.workflow import build_graph

BANNER = """
╔══════════════════════════════════════════════════════════════╗
║                 Big Ocean — Talk with Nerin                 ║
║                                                             ║
║  Have a natural conversation. There are no right or wrong   ║
║  answers — just be yourself.                                ║
║  Type 'quit' at any time to finish early.                   ║
╚══════════════════════════════════════════════════════════════╝
"""


def main() -> None:
    load_dotenv()
    setup_logging()
    print(BANNER)

    graph = build_graph()
    session_id = uuid.uuid4().hex[:8]
    config = {"configurable": {"thread_id": session_id}}

    # First invocation — triggers router → interviewer → human_turn (interrupt)
    result = graph.invoke(new_assessment_state(session_id), config)

    while True:
        messages = result.get("messages", [])

        if result.get("status") == "completed":
            print("\n" + "═" * 60)
            print("ASSESSMENT COMPLETE")
            print("═" * 60)
            if messages:
                print(messages[-1].content)
            print(f"\nSession ID: {session_id}")
            print("═" * 60)
            break

        if messages:
            print(f"\n🌊  Nerin: {messages[-1].content}\n")

        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nSession ended by user.")
            break

        if not user_input:
            continue

        if user_input.lower() == "quit":
            print("\nFinishing early — building your profile…")
            graph.update_state(config, {"done": True})
            result = graph.invoke(
                Command(resume="I'd like to stop here, thank you."),
                config,
            )
            continue

        result = graph.invoke(Command(resume=user_input), config)


if __name__ == "__main__":
    main()
