import pytest

from kaiscrape.plugins.common import TextCleaner, URLHelper


def test_clean_replaces_known_references():
    text = "Frieren&#8217;s  journey\n\n&#8211; part&#039;2 "
    assert TextCleaner.clean(text) == "Frieren's journey - part2"


def test_clean_handles_empty_input():
    assert TextCleaner.clean(None) == ""
    assert TextCleaner.clean("") == ""
    assert TextCleaner.clean("   \n\t ") == ""


def test_clean_removes_references_spliced_together():
    assert TextCleaner.clean("a &#3&#12;8; b") == "a b"


@pytest.mark.parametrize("text", [
    "Frieren&#8217;s journey",
    "  spaced\n\tout   text ",
    "a &#3&#12;8; b",
    "&#&#8217;38;",
    "plain",
])
def test_clean_is_idempotent(text):
    once = TextCleaner.clean(text)
    assert TextCleaner.clean(once) == once


def test_unescape_json_string():
    raw = '<a class=\\"title\\" title=\\\'x\\\'>\\n\\tA\\\\B</a>'
    assert TextCleaner.unescape_json_string(raw) == '<a class="title" title=\'x\'>\n\tA\\B</a>'
    assert TextCleaner.unescape_json_string(None) == ""


def test_error_sentinel_round_trip():
    url = URLHelper.make_error_sentinel("Unable to load search results.")
    assert url.startswith("#")
    assert URLHelper.is_error_sentinel(url)
    assert URLHelper.sentinel_message(url) == "Unable to load search results."
    assert not URLHelper.is_error_sentinel("https://animekai.to/watch/x")
    assert not URLHelper.is_error_sentinel("")


def test_make_absolute():
    assert URLHelper.make_absolute("/watch/a", "https://animekai.to") == "https://animekai.to/watch/a"
    assert URLHelper.make_absolute("https://x.to/a", "https://animekai.to") == "https://x.to/a"
