import asyncio

from kaiscrape.core.models import NOT_AVAILABLE, ErrorKind
from kaiscrape.plugins.animekai import AnimeKaiPlugin
from kaiscrape.plugins.animekai.plugin import SEARCH_ERROR_TITLE
from kaiscrape.plugins.common import URLHelper

from tests.conftest import BASE_URL, FakeTransport, html_response
from tests.test_parser import listing_block


def make_plugin(transport, **config):
    return AnimeKaiPlugin(config, transport=transport)


def test_search_returns_absolute_urls():
    page = "<html>" + listing_block("/watch/frieren-1", "https://img/1.jpg", "Frieren") + \
        listing_block("/watch/naruto-2", "https://img/2.jpg", "Naruto") + "</html>"
    transport = FakeTransport({"/browser": html_response(page)})

    result = asyncio.run(make_plugin(transport).search("frieren"))

    assert result.ok
    assert [r.page_url for r in result.value] == [
        f"{BASE_URL}/watch/frieren-1",
        f"{BASE_URL}/watch/naruto-2",
    ]
    assert transport.urls() == [f"{BASE_URL}/browser?keyword=frieren"]


def test_search_encodes_keyword():
    transport = FakeTransport({"/browser": html_response("<html></html>")})

    result = asyncio.run(make_plugin(transport).search("one piece & co"))

    assert result.ok
    assert result.value == []
    assert transport.urls() == [f"{BASE_URL}/browser?keyword=one%20piece%20%26%20co"]


def test_search_failure_returns_error_entry():
    transport = FakeTransport()

    result = asyncio.run(make_plugin(transport, error_image="https://img/down.png").search("frieren"))

    assert not result.ok
    assert result.error_kind == ErrorKind.TRANSPORT
    assert len(result.value) == 1
    entry = result.value[0]
    assert entry.title == SEARCH_ERROR_TITLE
    assert entry.image_url == "https://img/down.png"
    assert URLHelper.is_error_sentinel(entry.page_url)


def test_search_http_error_status_fails():
    transport = FakeTransport({"/browser": html_response("blocked", status=403)})

    result = asyncio.run(make_plugin(transport).search("frieren"))

    assert result.error_kind == ErrorKind.TRANSPORT
    assert result.value[0].title == SEARCH_ERROR_TITLE


def test_details_of_error_sentinel_makes_no_request():
    transport = FakeTransport()
    sentinel = URLHelper.make_error_sentinel("Unable to load search results.")

    result = asyncio.run(make_plugin(transport).get_details(sentinel))

    assert transport.calls == []
    assert result.error_kind == ErrorKind.INVALID_INPUT
    record = result.value[0]
    assert record.description == "Unable to load search results. Please try again later."
    assert record.aliases == ""
    assert record.airdate == ""


def test_search_error_entry_feeds_details():
    failing = FakeTransport()
    search = asyncio.run(make_plugin(failing).search("frieren"))

    details = asyncio.run(make_plugin(failing).get_details(search.value[0].page_url))

    assert len(failing.calls) == 1
    assert details.value[0].description.startswith("Unable to load search results.")


def test_details_fields_fall_back_independently():
    page = '<div class="ani-description">A mage&#8217;s journey</div><div class="ani-date">2023</div>'
    transport = FakeTransport({"/watch/": html_response(page)})

    result = asyncio.run(make_plugin(transport).get_details(f"{BASE_URL}/watch/frieren-1"))

    assert result.ok
    record = result.value[0]
    assert record.description == "A mage's journey"
    assert record.aliases == NOT_AVAILABLE
    assert record.airdate == "2023"


def test_details_fetch_failure_returns_error_record():
    transport = FakeTransport()
    url = f"{BASE_URL}/watch/frieren-1"

    result = asyncio.run(make_plugin(transport).get_details(url))

    assert result.error_kind == ErrorKind.TRANSPORT
    assert len(result.value) == 1
    record = result.value[0]
    assert record.description == f"Error loading description: Failed to fetch {url}"
    assert record.aliases == "Aliases: Unknown"
    assert record.airdate == "Aired: Unknown"
