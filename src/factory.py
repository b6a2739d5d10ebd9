"""
factory - Composition root for ENS Savant.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI, REST) call this factory to get fully
configured services and the shared agent.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)

    # Data services only (needs SUBGRAPH_URL):
    service = factory.create_registration_service()
    result = await service.fetch_registrations(24)

    # Conversational agent (needs LLM + CDP credentials), built once:
    agent = await factory.get_agent()
    async for fragment in agent.stream("how many names were registered today?"):
        ...
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional, Sequence

from application.services.registrations import RegistrationService
from application.services.text_records import TextRecordService
from domain.exceptions import AgentInitializationError, ConfigurationError
from domain.ports import RegistrationSourcePort, TextRecordSourcePort, WalletStatePort
from infrastructure.config import Settings
from infrastructure.ensdata.client import EnsDataClient
from infrastructure.llm.llm_builder import build_llm
from infrastructure.subgraph.client import SubgraphClient
from infrastructure.subgraph.source import SubgraphRegistrationSource
from infrastructure.wallet.provider import WalletToolkit, build_wallet_toolkit
from infrastructure.wallet.state_store import FileWalletStateStore
from agent.executor import AgentExecutor, build_react_graph
from agent.lazy import LazyResource
from agent.prompt import build_system_prompt
from agent.tools.fetch_registrations import FetchRegistrationsTool
from agent.tools.registration_count import RegistrationCountTool
from agent.tools.registry import ToolRegistry
from agent.tools.text_records import FetchTextRecordsTool

logger = logging.getLogger(__name__)

WalletBuilder = Callable[..., WalletToolkit]
GraphBuilder = Callable[[Any, Sequence[Any], str], Any]


class ServiceFactory:
    """Composition root — wires all dependencies together.

    Owns the single LazyResource that guards agent construction, so every
    adapter sharing this factory shares one agent and one wallet.
    Collaborators can be injected for tests; defaults talk to the real
    services.
    """

    def __init__(
        self,
        config: Settings,
        *,
        registration_source: Optional[RegistrationSourcePort] = None,
        text_record_source: Optional[TextRecordSourcePort] = None,
        wallet_store: Optional[WalletStatePort] = None,
        wallet_builder: WalletBuilder = build_wallet_toolkit,
        llm_builder: Callable[..., Any] = build_llm,
        graph_builder: GraphBuilder = build_react_graph,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config
        self._registration_source = registration_source
        self._text_record_source = text_record_source
        self._wallet_store = wallet_store or FileWalletStateStore(config.wallet_data_file)
        self._wallet_builder = wallet_builder
        self._llm_builder = llm_builder
        self._graph_builder = graph_builder
        self._clock = clock

        self._agent: LazyResource[AgentExecutor] = LazyResource(
            self._build_agent, name="ENS Savant agent",
        )

    @property
    def config(self) -> Settings:
        return self._config

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_registration_service(self) -> RegistrationService:
        """Create a RegistrationService backed by the configured subgraph."""
        if self._registration_source is None:
            self._config.validate_data()
            client = SubgraphClient(
                self._config.subgraph_url, timeout=self._config.subgraph_timeout,
            )
            self._registration_source = SubgraphRegistrationSource(client)
        return RegistrationService(self._registration_source, clock=self._clock)

    def create_text_record_service(self) -> TextRecordService:
        """Create a TextRecordService backed by ensdata.net."""
        if self._text_record_source is None:
            self._text_record_source = EnsDataClient(
                self._config.ensdata_url, timeout=self._config.ensdata_timeout,
            )
        return TextRecordService(self._text_record_source)

    def create_tool_registry(self) -> ToolRegistry:
        """Register the ENS data tools."""
        registry = ToolRegistry()
        registration_service = self.create_registration_service()
        registry.register(FetchRegistrationsTool(registration_service))
        registry.register(RegistrationCountTool(registration_service))
        registry.register(FetchTextRecordsTool(self.create_text_record_service()))
        return registry

    # ------------------------------------------------------------------
    # Agent
    # ------------------------------------------------------------------

    @property
    def agent_resource(self) -> LazyResource[AgentExecutor]:
        return self._agent

    async def get_agent(self) -> AgentExecutor:
        """Return the shared agent, building it on first use (single-flight)."""
        return await self._agent.acquire()

    async def _build_agent(self) -> AgentExecutor:
        """Build LLM, wallet and tools, then persist the wallet state.

        Runs at most once per successful initialization; LazyResource
        guarantees concurrent callers share this call.
        """
        config = self._config
        config.validate_agent()

        loop = asyncio.get_running_loop()
        try:
            wallet_data = self._wallet_store.read()
            toolkit = await loop.run_in_executor(
                None,
                lambda: self._wallet_builder(
                    api_key_name=config.cdp_api_key_name,
                    api_key_private_key=config.cdp_api_key_private_key,
                    network_id=config.network_id,
                    wallet_data=wallet_data,
                ),
            )

            llm = self._llm_builder(
                provider=config.llm_provider,
                model=config.active_llm_model,
                ollama_base_url=config.ollama_base_url,
                openai_api_key=config.openai_api_key,
                groq_api_key=config.groq_api_key,
            )

            registry = self.create_tool_registry()
            tools = list(toolkit.tools) + registry.to_langchain_tools()
            graph = self._graph_builder(llm, tools, build_system_prompt(registry))

            exported = await loop.run_in_executor(None, toolkit.export)
            self._wallet_store.write(exported)
        except ConfigurationError:
            raise
        except Exception as e:
            raise AgentInitializationError(f"Failed to initialize agent: {e}") from e

        logger.info(
            "Agent ready: %d tool(s), model=%s, network=%s",
            len(tools), config.active_llm_model, config.network_id,
        )
        return AgentExecutor(graph, thread_id=config.agent_thread_id)
