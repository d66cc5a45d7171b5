import asyncio
import json

import aiohttp
import pytest

from kaiscrape.core.exceptions import DecodeError
from kaiscrape.core.transport import OneShotFetcher, RawResponse, SessionFetcher, Transport


class ScriptedStrategy:
    def __init__(self, name, result):
        self.name = name
        self.result = result
        self.calls = []
        self.closed = False

    async def __call__(self, url, headers, method, body):
        self.calls.append((url, headers, method, body))
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result

    async def close(self):
        self.closed = True


def test_primary_strategy_wins():
    ok = RawResponse(status=200, url="https://x", text="primary")
    primary = ScriptedStrategy("primary", ok)
    secondary = ScriptedStrategy("secondary", RawResponse(status=200, url="https://x", text="secondary"))

    response = asyncio.run(Transport([primary, secondary]).request("https://x"))

    assert response.text == "primary"
    assert secondary.calls == []


def test_falls_back_with_same_arguments():
    primary = ScriptedStrategy("primary", aiohttp.ClientError("connection reset"))
    secondary = ScriptedStrategy("secondary", RawResponse(status=200, url="https://x", text="fallback"))

    transport = Transport([primary, secondary])
    response = asyncio.run(transport.request(
        "https://x/ajax", headers={"Referer": "https://x/"}, method="POST", body="a=1"
    ))

    assert response.text == "fallback"
    assert primary.calls == secondary.calls == [("https://x/ajax", {"Referer": "https://x/"}, "POST", "a=1")]


def test_returns_none_when_every_strategy_fails():
    primary = ScriptedStrategy("primary", aiohttp.ClientError("down"))
    secondary = ScriptedStrategy("secondary", RuntimeError("session closed"))

    assert asyncio.run(Transport([primary, secondary]).request("https://x")) is None
    assert len(primary.calls) == len(secondary.calls) == 1


def test_http_error_status_is_not_a_transport_failure():
    primary = ScriptedStrategy("primary", RawResponse(status=503, url="https://x", text="busy"))
    secondary = ScriptedStrategy("secondary", RawResponse(status=200, url="https://x", text="ok"))

    response = asyncio.run(Transport([primary, secondary]).request("https://x"))

    assert response.status == 503
    assert not response.ok
    assert secondary.calls == []


def test_cancellation_is_not_swallowed():
    primary = ScriptedStrategy("primary", asyncio.CancelledError())
    secondary = ScriptedStrategy("secondary", RawResponse(status=200, url="https://x", text="ok"))

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(Transport([primary, secondary]).request("https://x"))

    assert len(primary.calls) == 1
    assert secondary.calls == []


def test_context_manager_closes_strategies():
    strategy = ScriptedStrategy("primary", RawResponse(status=200, url="https://x", text=""))

    async def run():
        async with Transport([strategy]):
            pass

    asyncio.run(run())
    assert strategy.closed


def test_default_transport_strategies():
    transport = Transport.create_default(user_agent="Mozilla/5.0 test agent", timeout=10)
    assert [type(s) for s in transport.strategies] == [SessionFetcher, OneShotFetcher]
    assert transport.strategies[0].headers["User-Agent"] == "Mozilla/5.0 test agent"

    single = Transport.create_default(enable_fallback=False)
    assert [type(s) for s in single.strategies] == [SessionFetcher]


def test_raw_response_json():
    response = RawResponse(status=200, url="https://x", text=json.dumps({"result": "abc"}))
    assert response.json() == {"result": "abc"}

    with pytest.raises(DecodeError):
        RawResponse(status=200, url="https://x", text="<html>").json()
