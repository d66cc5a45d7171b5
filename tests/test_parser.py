from kaiscrape.plugins.animekai.parser import (
    DETAIL_PATTERNS,
    EPISODE_PATTERNS,
    LANGUAGE_PRIORITY,
    AnimeKaiParser,
)
from kaiscrape.plugins.common import PatternTable


def listing_block(href, image, title):
    return (
        '<div class="aitem"><div class="inner"><div class="wrap">'
        f'<a href="{href}" class="poster"><img data-src="{image}" alt=""></a>'
        f'<a class="title" title="{title}" href="{href}">{title}</a>'
        '</div></div></div>'
    )


def test_pattern_table_uses_declared_order():
    table = PatternTable({"value": [r'<b>(.*?)</b>', r'<i>(.*?)</i>']})
    assert table.first("value", "<i>second</i><b>first</b>") == "first"
    assert table.first("value", "<i>second</i>") == "second"
    assert table.first("value", "<u>none</u>") is None


def test_pattern_table_skips_blank_captures():
    table = PatternTable({"value": [r'<b>(.*?)</b>', r'<i>(.*?)</i>']})
    assert table.first("value", "<b>  </b><i>fallback</i>") == "fallback"


def test_search_results_in_document_order():
    html = listing_block("/watch/frieren-1", "https://img/1.jpg", "Frieren &#8211; Beyond") + \
        listing_block("https://animekai.to/watch/naruto-2", "https://img/2.jpg", "Naruto")

    results = AnimeKaiParser(html).parse_search_results()

    assert [r["title"] for r in results] == ["Frieren - Beyond", "Naruto"]
    assert results[0]["href"] == "https://animekai.to/watch/frieren-1"
    assert results[1]["href"] == "https://animekai.to/watch/naruto-2"
    assert results[0]["image"] == "https://img/1.jpg"


def test_search_skips_incomplete_blocks():
    broken = '<div class="aitem"><div><div><a class="title" title="No poster">x</a></div></div></div>'
    html = broken + listing_block("/watch/ok", "https://img/ok.jpg", "Ok")

    results = AnimeKaiParser(html).parse_search_results()

    assert [r["title"] for r in results] == ["Ok"]


def test_description_falls_back_to_second_pattern():
    html = (
        '<div class="full-description">from third pattern</div>'
        '<div class="ani-description">from second pattern</div>'
    )
    details = AnimeKaiParser(html).parse_details()

    assert details["description"] == "from second pattern"
    assert details["aliases"] is None


def test_details_are_cleaned():
    html = (
        '<div class="desc text-expand">  A mage&#8217;s\n   journey  </div>'
        '<small class="al-title text-expand">Sousou no Frieren</small>'
        '<span>Aired:</span> <span class="value">Sep 29, 2023</span>'
    )
    details = AnimeKaiParser(html).parse_details()

    assert details == {
        "description": "A mage's journey",
        "aliases": "Sousou no Frieren",
        "airdate": "Sep 29, 2023",
    }


def test_detail_tables_have_three_patterns_per_field():
    for field in ("description", "aliases", "airdate"):
        assert len(DETAIL_PATTERNS.patterns(field)) == 3


def test_anime_id_from_rate_box():
    html = '<div class="rate-box" data-score="8.9" data-id="c4S88Q"></div><div data-ani-id="other"></div>'
    assert AnimeKaiParser(html).parse_anime_id() == "c4S88Q"


def test_anime_id_falls_back_to_data_ani_id():
    html = '<div class="watch-section" data-ani-id="xyz123"></div>'
    assert AnimeKaiParser(html).parse_anime_id() == "xyz123"


def test_anime_id_absent():
    assert AnimeKaiParser("<html></html>").parse_anime_id() is None
    assert EPISODE_PATTERNS.first("anime_id", "<html></html>") is None


def test_episode_tokens_primary_scheme():
    html = (
        '<ul><li><a href="#" num="1" slug="1" token="tokA">1</a></li>'
        '<li><a href="#" num="2" slug="2" token="tokB">2</a></li></ul>'
    )
    assert AnimeKaiParser(html).parse_episode_tokens() == [(1, "tokA"), (2, "tokB")]


def test_episode_tokens_fallback_scheme():
    html = '<a class="ep" data-num="12" data-token="tokZ">12</a>'
    assert AnimeKaiParser(html).parse_episode_tokens() == [(12, "tokZ")]


def test_episode_tokens_keep_document_order_and_skip_non_numeric():
    html = (
        '<a num="3" token="t3"></a>'
        '<a num="special" token="tsp"></a>'
        '<a num="1.5" token="t15"></a>'
    )
    assert AnimeKaiParser(html).parse_episode_tokens() == [(3, "t3"), (1, "t15")]


def test_dub_group_preferred():
    html = (
        '<div class="server-items lang-group" data-id="sub"><span class="server" data-lid="subLid">S</span></div>'
        '<div class="server-items lang-group" data-id="softsub"><span class="server" data-lid="softLid">SS</span></div>'
        '<div class="server-items lang-group" data-id="dub"><span class="server" data-lid="dubLid">D</span></div>'
    )
    parser = AnimeKaiParser(html)

    assert LANGUAGE_PRIORITY[0] == "dub"
    assert parser.select_language_group()[0] == "dub"
    assert parser.parse_server_lid() == "dubLid"


def test_empty_group_is_skipped():
    html = (
        '<div class="server-items lang-group" data-id="dub"> </div>'
        '<div class="server-items lang-group" data-id="sub"><span class="server" data-lid="subLid">S</span></div>'
    )
    assert AnimeKaiParser(html).parse_server_lid() == "subLid"


def test_lid_without_language_groups_searches_whole_document():
    html = '<div class="servers"><span class="server" data-lid="plainLid">Server 1</span></div>'
    assert AnimeKaiParser(html).parse_server_lid() == "plainLid"


def test_no_lid_found():
    html = '<div class="server-items lang-group" data-id="raw"><span class="server">x</span></div>'
    assert AnimeKaiParser(html).parse_server_lid() is None
