import functools
from collections.abc import Mapping
from typing import Iterable, Union

from redis import Redis
from redis.exceptions import ConnectionError, TimeoutError

from env import get_redis_env
from utils import log, LogLevel
from .errors import NotFoundError, StoreUnavailableError
from .keys import (TERM_COUNTER_PREFIX, URL_SET_PREFIX, term_counter_key,
                   term_from_url_set_key, url_set_key)
from .term_counter import TermCounter

_LOG_SCOPE = "index_store"

PageContent = Union[str, TermCounter, Mapping[str, int]]


def _store_call(method):
    """Turn Redis connection failures into StoreUnavailableError"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (ConnectionError, TimeoutError) as e:
            log(_LOG_SCOPE, f"{method.__name__} failed, redis unavailable: {e}",
                LogLevel.ERROR)
            raise StoreUnavailableError(str(e)) from e
    return wrapper


def _decode(value) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class IndexStore:
    """
    Redis-backed web search index.

    URLSet:<term> is a set of the URLs where the term appears,
    TermCounter:<url> is a hash from term to the number of times it appears at url.
    Both are always written in the same MULTI/EXEC transaction.
    """

    def __init__(self, redis_client: Redis = None):
        self.redis_client = redis_client or Redis(**get_redis_env())

    @_store_call
    def is_indexed(self, url: str) -> bool:
        """
        Check whether there is a TermCounter for the url
        """
        return self.redis_client.exists(term_counter_key(url)) > 0

    @_store_call
    def get_urls(self, term: str) -> set[str]:
        """
        Look up a term and return the set of URLs where it appears
        """
        return {_decode(url) for url in self.redis_client.smembers(url_set_key(term))}

    @_store_call
    def get_count(self, url: str, term: str) -> int:
        """
        Number of times term appears at url.
        Raises NotFoundError when no count is stored or the stored value is not an integer.
        """
        value = self.redis_client.hget(term_counter_key(url), term)
        return self._parse_count(url, term, value)

    @_store_call
    def get_counts(self, term: str) -> dict[str, int]:
        """
        Look up a term and return a map from URL to count, fetched in one round trip
        """
        urls = sorted(self.get_urls(term))
        if not urls:
            return {}

        pipe = self.redis_client.pipeline(transaction=False)
        for url in urls:
            pipe.hget(term_counter_key(url), term)
        values = pipe.execute()

        counts = {}
        for url, value in zip(urls, values):
            try:
                counts[url] = self._parse_count(url, term, value)
            except NotFoundError as e:
                # Only reachable after term counters were deleted on their own
                log(_LOG_SCOPE, f"get_counts skip {url}: {e}", LogLevel.WARNING)
        return counts

    @staticmethod
    def _parse_count(url: str, term: str, value) -> int:
        if value is None:
            raise NotFoundError(url, term)
        try:
            return int(_decode(value))
        except ValueError:
            raise NotFoundError(url, term, f"malformed count {_decode(value)!r}") from None

    @staticmethod
    def _to_term_counter(url: str, content: PageContent) -> TermCounter:
        if isinstance(content, TermCounter):
            return content
        counter = TermCounter(url)
        if isinstance(content, str):
            counter.process_text(content)
        elif isinstance(content, Mapping):
            for term, count in content.items():
                counter.put(term, int(count))
        else:
            raise TypeError(
                f"Cannot index content of type {type(content).__name__}")
        return counter

    @_store_call
    def index_page(self, url: str, content: PageContent) -> int:
        """
        Add a page to the index, replacing whatever was indexed for url before.

        Args:
            url: URL of the page
            content: page text, a TermCounter, or a mapping from term to count

        Returns:
            Number of terms written for the page
        """
        counter = self._to_term_counter(url, content)
        counts = {term: count for term, count in counter.items() if count > 0}
        counter_key = term_counter_key(url)

        # Terms from a previous version of the page that are gone now
        old_terms = {_decode(term) for term in self.redis_client.hkeys(counter_key)}
        stale_terms = sorted(old_terms - counts.keys())

        pipe = self.redis_client.pipeline(transaction=True)
        for term in stale_terms:
            pipe.srem(url_set_key(term), url)
        if stale_terms:
            pipe.hdel(counter_key, *stale_terms)
        for term, count in counts.items():
            pipe.sadd(url_set_key(term), url)
            pipe.hset(counter_key, term, count)
        pipe.execute()

        log(_LOG_SCOPE,
            f"index_page {url}: {len(counts)} terms, {len(stale_terms)} stale terms removed",
            LogLevel.DEBUG)
        return len(counts)

    def index_html(self, url: str, html: str) -> int:
        """
        Index the paragraph text of an HTML page
        """
        counter = TermCounter(url)
        counter.process_html(html)
        return self.index_page(url, counter)

    # The methods below scan the whole key space.
    # They are meant for development and testing, not production.

    @_store_call
    def url_set_keys(self) -> set[str]:
        """
        Return URLSet keys for the terms that have been indexed
        """
        return {_decode(key) for key in self.redis_client.keys(URL_SET_PREFIX + "*")}

    @_store_call
    def term_counter_keys(self) -> set[str]:
        """
        Return TermCounter keys for the URLs that have been indexed
        """
        return {_decode(key) for key in self.redis_client.keys(TERM_COUNTER_PREFIX + "*")}

    def term_set(self) -> set[str]:
        """
        Return the set of terms that have been indexed
        """
        return {term_from_url_set_key(key) for key in self.url_set_keys()}

    def dump_index(self) -> list[tuple[str, str, int]]:
        """
        Return (term, url, count) for every indexed pair, sorted by term then url
        """
        rows = []
        for term in sorted(self.term_set()):
            counts = self.get_counts(term)
            for url in sorted(counts):
                rows.append((term, url, counts[url]))
        return rows

    @_store_call
    def _delete_keys(self, keys: Iterable[Union[str, bytes]]) -> int:
        keys = list(keys)
        if not keys:
            return 0
        pipe = self.redis_client.pipeline(transaction=True)
        for key in keys:
            pipe.delete(key)
        deleted = sum(pipe.execute())
        log(_LOG_SCOPE, f"deleted {deleted} keys", LogLevel.DEBUG)
        return deleted

    def delete_url_sets(self) -> int:
        """
        Delete all URLSet keys
        """
        return self._delete_keys(self.url_set_keys())

    def delete_term_counters(self) -> int:
        """
        Delete all TermCounter keys
        """
        return self._delete_keys(self.term_counter_keys())

    @_store_call
    def delete_all_keys(self) -> int:
        """
        Delete every key in the selected Redis database, index or not
        """
        # Raw replies, keys written by other programs need not be UTF-8
        return self._delete_keys(self.redis_client.keys("*"))
