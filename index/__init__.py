from .errors import IndexStoreError, NotFoundError, StoreUnavailableError
from .index_store import IndexStore
from .keys import term_counter_key, url_set_key
from .memory_redis import MemoryRedis
from .term_counter import TermCounter

__all__ = [
    "IndexStore",
    "IndexStoreError",
    "MemoryRedis",
    "NotFoundError",
    "StoreUnavailableError",
    "TermCounter",
    "term_counter_key",
    "url_set_key",
]
