import json

import pytest

from kaiscrape.core.transport import RawResponse


BASE_URL = "https://animekai.to"


def html_response(text, status=200, url=""):
    return RawResponse(status=status, url=url, text=text, headers={"Content-Type": "text/html"})


def json_response(data, status=200, url=""):
    return RawResponse(status=status, url=url, text=json.dumps(data), headers={"Content-Type": "application/json"})


class FakeTransport:
    """Answers requests from a table of URL fragments and records every call."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    async def request(self, url, headers=None, method="GET", body=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "method": method})
        for fragment, response in self.routes.items():
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return None

    async def close(self):
        self.closed = True

    def urls(self):
        return [call["url"] for call in self.calls]


@pytest.fixture
def fake_transport():
    return FakeTransport()
