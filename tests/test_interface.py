import asyncio
import json

from kaiscrape import interface
from kaiscrape.core.codec import encode
from kaiscrape.plugins.animekai import AnimeKaiConfig

from tests.conftest import BASE_URL, FakeTransport, html_response, json_response
from tests.test_parser import listing_block


def test_search_json_uses_wire_keys():
    page = listing_block("/watch/frieren-1", "https://img/1.jpg", "Frieren")
    transport = FakeTransport({"/browser": html_response(page)})

    data = json.loads(asyncio.run(interface.search("frieren", transport=transport)))

    assert data == [{"title": "Frieren", "image": "https://img/1.jpg", "href": f"{BASE_URL}/watch/frieren-1"}]


def test_search_failure_is_still_valid_json():
    data = json.loads(asyncio.run(interface.search("frieren", transport=FakeTransport())))

    assert len(data) == 1
    assert data[0]["title"] == "Error: Unable to load search results"
    assert data[0]["href"].startswith("#")


def test_search_fallback_uses_default_error_image():
    # An invalid timeout fails plugin construction before any request
    data = json.loads(asyncio.run(interface.search("frieren", config={"timeout": 1}, transport=FakeTransport())))

    assert data[0]["title"] == "Error: Unable to load search results"
    assert data[0]["image"] == AnimeKaiConfig().error_image
    assert data[0]["image"]


def test_search_fallback_keeps_configured_error_image():
    config = {"timeout": 1, "error_image": "https://img/down.png"}
    data = json.loads(asyncio.run(interface.search("frieren", config=config, transport=FakeTransport())))

    assert data[0]["image"] == "https://img/down.png"


def test_details_json_is_single_record_list():
    transport = FakeTransport({"/watch/": html_response('<div class="ani-description">Story</div>')})

    data = json.loads(asyncio.run(interface.details(f"{BASE_URL}/watch/frieren-1", transport=transport)))

    assert data == [{"description": "Story", "aliases": "Not available", "airdate": "Not available"}]


def test_episodes_json():
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"result": '<a num="1" token="tokA">1</a>'}),
        "/watch/": html_response('<div class="rate-box" data-id="abc"></div>'),
    })

    data = json.loads(asyncio.run(interface.episodes(f"{BASE_URL}/watch/frieren-1", transport=transport)))

    assert data == [{"href": f"{BASE_URL}/ajax/links/list?token=tokA&_={encode('tokA')}", "number": 1}]


def test_episodes_failure_is_empty_array():
    assert asyncio.run(interface.episodes(f"{BASE_URL}/watch/x", transport=FakeTransport())) == "[]"


def test_stream_failure_has_null_urls():
    text = asyncio.run(interface.stream_url(f"{BASE_URL}/ajax/links/list?token=t&_=dA", transport=FakeTransport()))
    data = json.loads(text)

    assert data["stream"] is None
    assert data["subtitles"] is None
    assert data["error"]


def test_injected_transport_is_not_closed():
    transport = FakeTransport()
    asyncio.run(interface.episodes(f"{BASE_URL}/watch/x", transport=transport))
    assert not transport.closed


def test_unicode_is_not_escaped():
    page = listing_block("/watch/f", "https://img/1.jpg", "葬送のフリーレン")
    transport = FakeTransport({"/browser": html_response(page)})

    text = asyncio.run(interface.search("frieren", transport=transport))

    assert "葬送のフリーレン" in text
