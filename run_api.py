"""
Run the ENS Savant REST API.

Usage:
    python run_api.py

Endpoints:
    POST /api/chat      {"prompt": "..."} → text/event-stream of agent output
    GET  /health        liveness + whether the agent has been built

Environment variables:
    OPENAI_API_KEY           Required when LLM_PROVIDER=openai (default)
    CDP_API_KEY_NAME         Required — Coinbase Developer Platform API key name
    CDP_API_KEY_PRIVATE_KEY  Required — CDP API key private key
    SUBGRAPH_URL             Required — ENS subgraph GraphQL endpoint
    NETWORK_ID               Wallet network (default: base-sepolia)
    LLM_PROVIDER             "openai", "groq" or "ollama" (default: openai)
    WALLET_DATA_FILE         Exported wallet state (default: wallet_data.txt)
    HOST / PORT              Bind address (default: 0.0.0.0:8000)
"""

import logging
import os
import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "adapters.rest.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
