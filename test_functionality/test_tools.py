"""
Test the agent tool adapters and the LangChain registry bridge.
"""
import json

import pytest

from agent.prompt import build_system_prompt
from agent.tools.fetch_registrations import FetchRegistrationsTool, parse_hours
from agent.tools.registration_count import RegistrationCountTool
from agent.tools.registry import ToolRegistry
from agent.tools.text_records import FetchTextRecordsTool
from application.services.registrations import RegistrationService
from application.services.text_records import TextRecordService
from domain.exceptions import InvalidHoursError, TextRecordLookupError
from fakes import FakeRegistrationSource, FakeTextRecordSource, make_record


@pytest.mark.parametrize("text,expected", [
    ("24", 24.0),
    (" 3 ", 3.0),
    ("1.5", 1.5),
    ("24 hours", 24.0),
    ('"6"', 6.0),
])
def test_parse_hours_accepts(text, expected):
    assert parse_hours(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-3", "0", "hours: 5", "nan", "1e3", "2,5", "24h"])
def test_parse_hours_rejects(text):
    with pytest.raises(InvalidHoursError, match="hours must be"):
        parse_hours(text)


def _registry(sizes, text_source=None):
    service = RegistrationService(FakeRegistrationSource(sizes), clock=lambda: 1_700_000_000.0)
    registry = ToolRegistry()
    registry.register(FetchRegistrationsTool(service))
    registry.register(RegistrationCountTool(RegistrationService(
        FakeRegistrationSource(sizes), clock=lambda: 1_700_000_000.0,
    )))
    registry.register(FetchTextRecordsTool(TextRecordService(text_source or FakeTextRecordSource())))
    return registry


@pytest.mark.asyncio
async def test_fetch_registrations_tool_returns_json_records():
    registry = _registry([2])

    output = await registry.invoke("fetch_registrations", hours="5")

    assert json.loads(output) == [make_record(0).to_dict(), make_record(1).to_dict()]
    assert json.loads(output)[0]["transactionHash"] == make_record(0).transaction_hash


@pytest.mark.asyncio
async def test_count_tool_returns_json_number():
    registry = _registry([100, 100, 37])

    assert await registry.invoke("fetch_registration_count", hours="24") == "237"


@pytest.mark.asyncio
async def test_hours_tools_reject_non_numeric():
    registry = _registry([0])

    with pytest.raises(InvalidHoursError):
        await registry.invoke("fetch_registrations", hours="yesterday")
    with pytest.raises(InvalidHoursError):
        await registry.invoke("fetch_registration_count", hours="")


@pytest.mark.asyncio
async def test_text_records_tool_strips_query():
    source = FakeTextRecordSource({"ens": "nick.eth", "twitter": "nicksdjohnson"})
    registry = _registry([0], text_source=source)

    output = await registry.invoke("fetch_text_records", query="  nick.eth ")

    assert json.loads(output) == {"ens": "nick.eth", "twitter": "nicksdjohnson"}
    assert source.queries == ["nick.eth"]


@pytest.mark.asyncio
async def test_text_records_tool_rejects_empty_query():
    registry = _registry([0])
    with pytest.raises(TextRecordLookupError):
        await registry.invoke("fetch_text_records", query="   ")


def test_registry_lookup():
    registry = _registry([0])
    assert registry.names() == [
        "fetch_registrations", "fetch_registration_count", "fetch_text_records",
    ]
    with pytest.raises(KeyError):
        registry.get("missing")


@pytest.mark.asyncio
async def test_langchain_tools_are_async_and_single_argument():
    registry = _registry([100, 3])
    lc_tools = {t.name: t for t in registry.to_langchain_tools()}

    assert set(lc_tools) == set(registry.names())
    assert list(lc_tools["fetch_registration_count"].args) == ["hours"]
    assert list(lc_tools["fetch_text_records"].args) == ["query"]

    assert await lc_tools["fetch_registration_count"].ainvoke({"hours": "2"}) == "103"


@pytest.mark.asyncio
async def test_langchain_tool_reports_domain_errors_as_text():
    registry = _registry([])
    lc_tools = {t.name: t for t in registry.to_langchain_tools()}

    output = await lc_tools["fetch_registration_count"].ainvoke({"hours": "2"})

    assert output.startswith("Error: ")
    assert "no more pages configured" in output


@pytest.mark.asyncio
async def test_langchain_tool_accepts_numeric_hours():
    registry = _registry([100, 3])
    lc_tools = {t.name: t for t in registry.to_langchain_tools()}

    assert await lc_tools["fetch_registration_count"].ainvoke({"hours": 24}) == "103"


@pytest.mark.asyncio
async def test_langchain_tool_reports_bad_arguments_as_text():
    registry = _registry([])
    lc_tools = {t.name: t for t in registry.to_langchain_tools()}

    output = await lc_tools["fetch_registration_count"].ainvoke({"hours": ["24"]})

    assert isinstance(output, str)


def test_system_prompt_mentions_registered_tools_only():
    registry = ToolRegistry()
    registry.register(RegistrationCountTool(RegistrationService(FakeRegistrationSource([0]))))

    prompt = build_system_prompt(registry)

    assert "ENS Savant" in prompt
    assert "fetch_registration_count" in prompt
    assert "fetch_text_records" not in prompt
