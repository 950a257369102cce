"""
Redis key naming for the search index.

The prefixes are part of the stored data format and must not change.
"""

URL_SET_PREFIX = "URLSet:"
TERM_COUNTER_PREFIX = "TermCounter:"


def url_set_key(term: str) -> str:
    """Key of the set holding every URL where `term` occurs"""
    return URL_SET_PREFIX + term


def term_counter_key(url: str) -> str:
    """Key of the hash holding term counts for `url`"""
    return TERM_COUNTER_PREFIX + url


def _strip_prefix(key: str, prefix: str) -> str:
    if not key.startswith(prefix):
        raise ValueError(f"Key {key!r} does not start with {prefix!r}")
    return key[len(prefix):]


def term_from_url_set_key(key: str) -> str:
    return _strip_prefix(key, URL_SET_PREFIX)


def url_from_term_counter_key(key: str) -> str:
    return _strip_prefix(key, TERM_COUNTER_PREFIX)
