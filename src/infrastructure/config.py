"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from environment or passed
explicitly. Validation is split by feature so the data-only CLI commands
do not demand LLM or wallet credentials.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NETWORK_ID = "base-sepolia"


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for ENS Savant.

    No module-level globals — construct via from_env() or pass explicitly
    in tests.
    """
    # ── Centralized LLM Provider ────────────────────────────────
    # Allowed: "openai", "groq", "ollama"
    llm_provider: str = "openai"

    # Model names — only the one matching llm_provider is used.
    llm_model_openai: str = "gpt-4o-mini"
    llm_model_groq: str = "llama-3.3-70b-versatile"
    llm_model_ollama: str = "llama3.2"

    # Connection details
    ollama_base_url: str = "http://localhost:11434/"
    groq_api_key: str = ""
    openai_api_key: str = ""

    # ── Wallet (Coinbase Developer Platform) ───────────────────
    cdp_api_key_name: str = ""
    cdp_api_key_private_key: str = ""
    network_id: str = DEFAULT_NETWORK_ID
    network_id_from_env: bool = False
    wallet_data_file: Path = Path("wallet_data.txt")

    # ── Data sources ───────────────────────────────────────────
    subgraph_url: str = ""
    subgraph_timeout: float = 30.0
    ensdata_url: str = "https://ensdata.net"
    ensdata_timeout: float = 15.0

    # Agent
    agent_thread_id: str = "ENS Savant"
    autonomous_interval: int = 10

    log_level: str = "INFO"

    @property
    def active_llm_model(self) -> str:
        """Return the model name for the currently active LLM provider."""
        if self.llm_provider == "groq":
            return self.llm_model_groq
        elif self.llm_provider == "ollama":
            return self.llm_model_ollama
        return self.llm_model_openai

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def missing_agent_settings(self) -> list[str]:
        """Names of required variables for the LLM + wallet agent that are unset."""
        missing: list[str] = []
        if self.llm_provider == "openai" and not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        elif self.llm_provider == "groq" and not self.groq_api_key:
            missing.append("GROQ_API_KEY")
        if not self.cdp_api_key_name:
            missing.append("CDP_API_KEY_NAME")
        if not self.cdp_api_key_private_key:
            missing.append("CDP_API_KEY_PRIVATE_KEY")
        return missing

    def validate_data(self) -> None:
        """Raise ConfigurationError if the subgraph endpoint is not configured."""
        if not self.subgraph_url:
            raise ConfigurationError(
                ["SUBGRAPH_URL"], "SUBGRAPH_URL environment variable is not defined."
            )

    def validate_agent(self) -> None:
        """Raise ConfigurationError if anything the agent needs is missing.

        Logs a warning (not an error) when NETWORK_ID falls back to the
        testnet default.
        """
        if self.llm_provider not in ("openai", "groq", "ollama"):
            raise ConfigurationError(
                ["LLM_PROVIDER"],
                f"Unsupported LLM_PROVIDER: '{self.llm_provider}'. "
                "Must be 'openai', 'groq', or 'ollama'.",
            )
        missing = self.missing_agent_settings()
        if not self.subgraph_url:
            missing.append("SUBGRAPH_URL")
        if missing:
            raise ConfigurationError(missing)
        if not self.network_id_from_env:
            logger.warning(
                "NETWORK_ID not set, defaulting to %s testnet", DEFAULT_NETWORK_ID,
            )

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from the process environment (and a .env file)."""
        from dotenv import load_dotenv
        load_dotenv()
        network_id = os.getenv("NETWORK_ID", "")

        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "openai").lower().strip(),
            llm_model_openai=os.getenv("LLM_MODEL_OPENAI", "gpt-4o-mini"),
            llm_model_groq=os.getenv("LLM_MODEL_GROQ", "llama-3.3-70b-versatile"),
            llm_model_ollama=os.getenv("LLM_MODEL_OLLAMA", "llama3.2"),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/"),
            groq_api_key=os.getenv("GROQ_API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),

            cdp_api_key_name=os.getenv("CDP_API_KEY_NAME", ""),
            # Keys pasted into .env usually carry literal "\n" sequences.
            cdp_api_key_private_key=os.getenv("CDP_API_KEY_PRIVATE_KEY", "").replace("\\n", "\n"),
            network_id=network_id or DEFAULT_NETWORK_ID,
            network_id_from_env=bool(network_id),
            wallet_data_file=Path(os.getenv("WALLET_DATA_FILE", "wallet_data.txt")),

            subgraph_url=os.getenv("SUBGRAPH_URL", ""),
            subgraph_timeout=float(os.getenv("SUBGRAPH_TIMEOUT", "30")),
            ensdata_url=os.getenv("ENSDATA_URL", "https://ensdata.net"),
            ensdata_timeout=float(os.getenv("ENSDATA_TIMEOUT", "15")),

            agent_thread_id=os.getenv("AGENT_THREAD_ID", "ENS Savant"),
            autonomous_interval=int(os.getenv("AUTONOMOUS_INTERVAL", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
