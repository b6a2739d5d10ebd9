"""
Test the ensdata.net text-record client. requests is mocked.
"""
from unittest.mock import MagicMock

import pytest
import requests

from domain.exceptions import TextRecordLookupError
from infrastructure.ensdata.client import EnsDataClient


def _session(status=200, payload=None, side_effect=None):
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
        return session
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.json.return_value = payload
    session.get.return_value = response
    return session


@pytest.mark.asyncio
async def test_lookup_by_name():
    session = _session(payload={"ens": "vitalik.eth", "address": "0xd8dA"})
    client = EnsDataClient("https://ensdata.net/", timeout=3, session=session)

    data = await client.lookup("vitalik.eth")

    assert data["ens"] == "vitalik.eth"
    session.get.assert_called_once_with("https://ensdata.net/vitalik.eth", timeout=3)


@pytest.mark.asyncio
async def test_non_2xx_is_an_error():
    client = EnsDataClient(session=_session(status=404, payload={"error": "not found"}))

    with pytest.raises(TextRecordLookupError, match="status: 404"):
        await client.lookup("nobody.eth")


@pytest.mark.asyncio
async def test_transport_error():
    client = EnsDataClient(session=_session(side_effect=requests.exceptions.ConnectionError("x")))

    with pytest.raises(TextRecordLookupError, match="unreachable"):
        await client.lookup("vitalik.eth")


@pytest.mark.asyncio
async def test_unexpected_payload():
    client = EnsDataClient(session=_session(payload=["not", "an", "object"]))

    with pytest.raises(TextRecordLookupError):
        await client.lookup("vitalik.eth")
