import pytest

from index.keys import (term_counter_key, term_from_url_set_key, url_from_term_counter_key,
                        url_set_key)


def test_key_construction():
    """Test key names match the stored data format"""
    assert url_set_key("cat") == "URLSet:cat"
    assert term_counter_key("http://a") == "TermCounter:http://a"
    assert url_set_key("") == "URLSet:"


def test_prefix_stripping():
    """Test keys map back to their term or url, colons included"""
    assert term_from_url_set_key("URLSet:cat") == "cat"
    assert term_from_url_set_key("URLSet:a:b") == "a:b", "Only the prefix should be removed"
    assert url_from_term_counter_key(
        term_counter_key("https://en.wikipedia.org/wiki/Java")) == "https://en.wikipedia.org/wiki/Java"
    assert term_from_url_set_key("URLSet:") == ""


def test_prefix_stripping_wrong_key():
    with pytest.raises(ValueError):
        term_from_url_set_key("TermCounter:http://a")
    with pytest.raises(ValueError):
        url_from_term_counter_key("URLSet:cat")
