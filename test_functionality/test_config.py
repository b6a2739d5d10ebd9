"""
Test Settings.from_env and the per-feature validation.
"""
import logging

import dotenv
import pytest

from domain.exceptions import ConfigurationError
from infrastructure.config import Settings
from fakes import make_settings

ENV_VARS = [
    "LLM_PROVIDER", "OPENAI_API_KEY", "GROQ_API_KEY", "CDP_API_KEY_NAME",
    "CDP_API_KEY_PRIVATE_KEY", "NETWORK_ID", "SUBGRAPH_URL", "SUBGRAPH_TIMEOUT",
    "WALLET_DATA_FILE", "LOG_LEVEL",
]


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setattr(dotenv, "load_dotenv", lambda *a, **k: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(env):
    settings = Settings.from_env()

    assert settings.llm_provider == "openai"
    assert settings.active_llm_model == "gpt-4o-mini"
    assert settings.network_id == "base-sepolia"
    assert settings.network_id_from_env is False
    assert settings.subgraph_timeout == 30.0


def test_private_key_newlines_are_unescaped(env):
    env.setenv("CDP_API_KEY_PRIVATE_KEY", "-----BEGIN-----\\nabc\\n-----END-----")

    settings = Settings.from_env()

    assert settings.cdp_api_key_private_key == "-----BEGIN-----\nabc\n-----END-----"


def test_validate_agent_lists_every_missing_variable(env):
    settings = Settings.from_env()

    with pytest.raises(ConfigurationError) as excinfo:
        settings.validate_agent()

    assert excinfo.value.missing == [
        "OPENAI_API_KEY", "CDP_API_KEY_NAME", "CDP_API_KEY_PRIVATE_KEY", "SUBGRAPH_URL",
    ]


def test_groq_needs_its_own_key(env):
    env.setenv("LLM_PROVIDER", "Groq")

    settings = Settings.from_env()

    assert settings.active_llm_model == "llama-3.3-70b-versatile"
    assert settings.missing_agent_settings()[0] == "GROQ_API_KEY"


def test_unknown_provider_is_rejected():
    with pytest.raises(ConfigurationError, match="Unsupported LLM_PROVIDER"):
        make_settings(llm_provider="anthropic").validate_agent()


def test_default_network_only_warns(caplog):
    settings = make_settings(network_id_from_env=False)

    with caplog.at_level(logging.WARNING, logger="infrastructure.config"):
        settings.validate_agent()

    assert "NETWORK_ID not set" in caplog.text


def test_validate_data_needs_only_subgraph_url():
    make_settings(openai_api_key="", cdp_api_key_name="").validate_data()

    with pytest.raises(ConfigurationError) as excinfo:
        make_settings(subgraph_url="").validate_data()
    assert excinfo.value.missing == ["SUBGRAPH_URL"]
