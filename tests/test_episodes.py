import asyncio

from kaiscrape.core.codec import encode
from kaiscrape.core.models import ErrorKind
from kaiscrape.plugins.animekai import AnimeKaiPlugin
from kaiscrape.plugins.common import URLHelper

from tests.conftest import BASE_URL, FakeTransport, html_response, json_response


PAGE_URL = f"{BASE_URL}/watch/frieren-1"
ANIME_PAGE = '<div class="rate-box" data-score="9.1" data-id="c4S88Q"></div>'

PRIMARY_LIST = (
    '<div class="eplist"><ul class="range">'
    '<li><a href="#" num="1" slug="1" langs="3" token="tokA">1</a></li>'
    '<li><a href="#" num="2" slug="2" langs="1" token="tokB">2</a></li>'
    '</ul></div>'
)


def run_episodes(transport, url=PAGE_URL):
    plugin = AnimeKaiPlugin(transport=transport)
    return asyncio.run(plugin.get_episodes(url))


def test_episode_urls_carry_encoded_token():
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"status": 200, "result": PRIMARY_LIST}),
        "/watch/": html_response(ANIME_PAGE),
    })

    result = run_episodes(transport)

    assert result.ok
    assert [(e.number, e.request_url) for e in result.value] == [
        (1, f"{BASE_URL}/ajax/links/list?token=tokA&_={encode('tokA')}"),
        (2, f"{BASE_URL}/ajax/links/list?token=tokB&_={encode('tokB')}"),
    ]


def test_episode_list_request():
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"status": 200, "result": PRIMARY_LIST}),
        "/watch/": html_response(ANIME_PAGE),
    })

    run_episodes(transport)

    page_call, list_call = transport.calls
    assert page_call["url"] == PAGE_URL
    assert list_call["url"] == f"{BASE_URL}/ajax/episodes/list?ani_id=c4S88Q&_={encode('c4S88Q')}"
    assert list_call["headers"]["X-Requested-With"] == "XMLHttpRequest"
    assert list_call["headers"]["Referer"] == PAGE_URL


def test_escaped_episode_markup_is_unescaped():
    escaped = PRIMARY_LIST.replace('"', '\\"')
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"result": escaped}),
        "/watch/": html_response(ANIME_PAGE),
    })

    result = run_episodes(transport)

    assert [e.number for e in result.value] == [1, 2]


def test_fallback_token_scheme():
    markup = '<a class="ep" data-num="7" data-token="tok7">7</a><a class="ep" data-num="8" data-token="tok8">8</a>'
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"result": markup}),
        "/watch/": html_response('<section data-ani-id="zz9"></section>'),
    })

    result = run_episodes(transport)

    assert [e.number for e in result.value] == [7, 8]
    assert transport.calls[1]["url"].startswith(f"{BASE_URL}/ajax/episodes/list?ani_id=zz9&")


def test_missing_anime_id_returns_empty_list():
    transport = FakeTransport({"/watch/": html_response("<html><body>No id here</body></html>")})

    result = run_episodes(transport)

    assert result.value == []
    assert result.error_kind == ErrorKind.EXTRACTION
    assert len(transport.calls) == 1


def test_missing_result_is_upstream_failure():
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"status": 404}),
        "/watch/": html_response(ANIME_PAGE),
    })

    result = run_episodes(transport)

    assert result.value == []
    assert result.error_kind == ErrorKind.UPSTREAM


def test_list_without_episodes_is_extraction_failure():
    transport = FakeTransport({
        "/ajax/episodes/list": json_response({"result": "<div class=\"eplist\"></div>"}),
        "/watch/": html_response(ANIME_PAGE),
    })

    result = run_episodes(transport)

    assert result.value == []
    assert result.error_kind == ErrorKind.EXTRACTION


def test_error_sentinel_is_rejected_without_request():
    transport = FakeTransport()

    result = run_episodes(transport, URLHelper.make_error_sentinel("Unable to load search results."))

    assert result.value == []
    assert result.error_kind == ErrorKind.INVALID_INPUT
    assert transport.calls == []


def test_page_fetch_failure():
    result = run_episodes(FakeTransport())

    assert result.value == []
    assert result.error_kind == ErrorKind.TRANSPORT
