"""
infrastructure.wallet.provider - Coinbase AgentKit wallet + action tools.

Builds a CDP MPC wallet provider (restoring a previously exported wallet
when one is supplied) and exposes AgentKit's onchain actions as LangChain
tools. Vendor imports are local to build_wallet_toolkit() so the rest of
the application (data tools, CLI data commands, tests) never needs the
SDK installed to import.

All calls here are synchronous network I/O; run them in a thread pool.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class WalletToolkit:
    """Everything the agent needs from the wallet layer.

    tools:   LangChain tools for AgentKit's action providers.
    export:  Callable returning the wallet state to persist (opaque JSON).
    """
    tools: list[Any]
    export: Callable[[], str]


def build_wallet_toolkit(
    *,
    api_key_name: str,
    api_key_private_key: str,
    network_id: str,
    wallet_data: Optional[str] = None,
) -> WalletToolkit:
    """Configure the CDP wallet and AgentKit action providers.

    Args:
        api_key_name:        CDP API key name.
        api_key_private_key: CDP API key private key (PEM, real newlines).
        network_id:          e.g. "base-sepolia".
        wallet_data:         Previously exported wallet JSON, if any.

    Returns:
        WalletToolkit with LangChain tools and an export callable.
    """
    from coinbase_agentkit import (
        AgentKit,
        AgentKitConfig,
        CdpWalletProvider,
        CdpWalletProviderConfig,
        cdp_api_action_provider,
        cdp_wallet_action_provider,
        erc20_action_provider,
        pyth_action_provider,
        wallet_action_provider,
        weth_action_provider,
    )
    from coinbase_agentkit.wallet_providers import CdpProviderConfig
    from coinbase_agentkit_langchain import get_langchain_tools

    wallet_provider = CdpWalletProvider(CdpWalletProviderConfig(
        api_key_name=api_key_name,
        api_key_private_key=api_key_private_key,
        network_id=network_id,
        wallet_data=wallet_data,
    ))
    logger.info(
        "CDP wallet configured on %s (%s)",
        network_id, "restored" if wallet_data else "new",
    )

    # Same credentials as the wallet provider, not os.environ.
    cdp_config = CdpProviderConfig(
        api_key_name=api_key_name,
        api_key_private_key=api_key_private_key,
    )
    agentkit = AgentKit(AgentKitConfig(
        wallet_provider=wallet_provider,
        action_providers=[
            weth_action_provider(),
            pyth_action_provider(),
            wallet_action_provider(),
            erc20_action_provider(),
            cdp_api_action_provider(cdp_config),
            cdp_wallet_action_provider(cdp_config),
        ],
    ))

    def export() -> str:
        return json.dumps(wallet_provider.export_wallet().to_dict())

    return WalletToolkit(tools=list(get_langchain_tools(agentkit)), export=export)
