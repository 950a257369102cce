import fnmatch
from typing import Any, Union

from redis.exceptions import ConnectionError, ResponseError

_WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"


def _encode(value: Any) -> bytes:
    """Encode a value the way redis-py does before sending it"""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return repr(value).encode("utf-8")
    raise TypeError(f"Invalid input of type: {type(value).__name__!r}")


class MemoryRedis:
    """
    In-memory stand-in for the part of the redis-py client used by IndexStore.

    Replies are bytes, like a client created without decode_responses.
    Empty sets and hashes disappear, as they do in Redis.
    Set `available = False` to make every call fail as if Redis were down,
    or `fail_on_execute = True` to make the next pipeline execute fail
    before any queued command is applied.
    """

    def __init__(self):
        self._data: dict[bytes, Union[set, dict]] = {}
        self.available = True
        self.fail_on_execute = False

    def _check_available(self):
        if not self.available:
            raise ConnectionError("Error connecting to in-memory redis: unavailable")

    def _get(self, name, kind: type):
        value = self._data.get(_encode(name))
        if value is not None and not isinstance(value, kind):
            raise ResponseError(_WRONGTYPE)
        return value

    def _drop_if_empty(self, name: bytes):
        if not self._data.get(name):
            self._data.pop(name, None)

    def ping(self) -> bool:
        self._check_available()
        return True

    def exists(self, *names) -> int:
        self._check_available()
        return sum(1 for name in names if _encode(name) in self._data)

    def keys(self, pattern: str = "*") -> list[bytes]:
        self._check_available()
        # Match on raw bytes, keys need not be valid UTF-8
        pattern = _encode(pattern)
        return [key for key in self._data if fnmatch.fnmatchcase(key, pattern)]

    def delete(self, *names) -> int:
        self._check_available()
        deleted = 0
        for name in names:
            if self._data.pop(_encode(name), None) is not None:
                deleted += 1
        return deleted

    def sadd(self, name, *values) -> int:
        self._check_available()
        members = self._get(name, set)
        if members is None:
            members = self._data.setdefault(_encode(name), set())
        before = len(members)
        members.update(_encode(value) for value in values)
        return len(members) - before

    def srem(self, name, *values) -> int:
        self._check_available()
        members = self._get(name, set)
        if members is None:
            return 0
        before = len(members)
        members.difference_update(_encode(value) for value in values)
        self._drop_if_empty(_encode(name))
        return before - len(members)

    def smembers(self, name) -> set[bytes]:
        self._check_available()
        return set(self._get(name, set) or ())

    def hset(self, name, key=None, value=None, mapping: dict = None) -> int:
        self._check_available()
        items = dict(mapping or {})
        if key is not None:
            items[key] = value
        if not items:
            raise ResponseError("wrong number of arguments for 'hset' command")
        fields = self._get(name, dict)
        if fields is None:
            fields = self._data.setdefault(_encode(name), {})
        added = 0
        for field, field_value in items.items():
            field = _encode(field)
            if field not in fields:
                added += 1
            fields[field] = _encode(field_value)
        return added

    def hget(self, name, key):
        self._check_available()
        fields = self._get(name, dict) or {}
        return fields.get(_encode(key))

    def hkeys(self, name) -> list[bytes]:
        self._check_available()
        return list(self._get(name, dict) or ())

    def hdel(self, name, *keys) -> int:
        self._check_available()
        fields = self._get(name, dict)
        if fields is None:
            return 0
        deleted = 0
        for key in keys:
            if fields.pop(_encode(key), None) is not None:
                deleted += 1
        self._drop_if_empty(_encode(name))
        return deleted

    def pipeline(self, transaction: bool = True) -> "MemoryPipeline":
        return MemoryPipeline(self, transaction)


class MemoryPipeline:
    """
    Buffers commands and applies them in order on execute().
    Nothing is visible to readers before execute() returns.
    """

    _COMMANDS = ("exists", "keys", "delete", "sadd", "srem", "smembers",
                 "hset", "hget", "hkeys", "hdel")

    def __init__(self, client: MemoryRedis, transaction: bool = True):
        self.client = client
        self.transaction = transaction
        self.command_stack: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        if name not in self._COMMANDS:
            raise AttributeError(name)

        def queue(*args, **kwargs):
            self.command_stack.append((name, args, kwargs))
            return self
        return queue

    def __len__(self):
        return len(self.command_stack)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.reset()

    def reset(self):
        self.command_stack = []

    def execute(self, raise_on_error: bool = True) -> list:
        stack, self.command_stack = self.command_stack, []
        self.client._check_available()
        if self.client.fail_on_execute:
            self.client.fail_on_execute = False
            raise ConnectionError("Connection closed by server.")

        results = []
        for name, args, kwargs in stack:
            try:
                results.append(getattr(self.client, name)(*args, **kwargs))
            except ResponseError as e:
                results.append(e)
        if raise_on_error:
            for result in results:
                if isinstance(result, ResponseError):
                    raise result
        return results
