"""
Run the ENS Savant CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    start          Choose chat or autonomous mode interactively
    chat           Interactive chat session with the agent
    auto           Autonomous mode (--interval seconds between runs)
    ask            One-shot question
    registrations  List registrations from the last N hours (--hours)
    count          Count registrations from the last N hours (--hours)
    records        ENS text records for a name or address
    serve          Run the REST API

Examples:
    python run_cli.py chat
    python run_cli.py ask "how many ENS names were registered in the last 24 hours?"
    python run_cli.py count --hours 6

Environment variables:
    OPENAI_API_KEY           Required for agent commands when LLM_PROVIDER=openai
    GROQ_API_KEY             Required for agent commands when LLM_PROVIDER=groq
    CDP_API_KEY_NAME         Required for agent commands
    CDP_API_KEY_PRIVATE_KEY  Required for agent commands
    SUBGRAPH_URL             Required for agent and data commands
    NETWORK_ID               Wallet network (default: base-sepolia)
    ENSDATA_URL              Text-record API (default: https://ensdata.net)
    AUTONOMOUS_INTERVAL      Seconds between autonomous runs (default: 10)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
