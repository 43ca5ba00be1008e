# --- Result caches -------------------------------------------------------------
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

from stencil_lens.core.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


class QuickInfoCache(Generic[T]):
    """
    LRU cache for hover results keyed by (file, node start, node end, version).

    The snapshot version is part of the key, so entries for an edited file are
    never served; they simply age out.
    """

    def __init__(self, max_entries: int = 512):
        self._entries: OrderedDict[Hashable, Optional[T]] = OrderedDict()
        self._max = max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Optional[T]]) -> Optional[T]:
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            log.debug("quick_info_cache_hit", key=key)
            # Move to end (LRU)
            self._entries.move_to_end(key)
            return value

        value = compute()
        self._entries[key] = value
        # Evict oldest if over capacity
        while len(self._entries) > self._max:
            self._entries.popitem(last=False)
        return value

    def clear(self):
        self._entries.clear()


class CompletionDetailsCache(Generic[T]):
    """
    Completion details for one (file, position, version) scope at a time.
    Moving to a new scope drops everything cached for the previous one.
    """

    def __init__(self):
        self._scope: Optional[tuple] = None
        self._entries: dict[str, Optional[T]] = {}

    @property
    def scope(self) -> Optional[tuple]:
        return self._scope

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, scope: tuple, name: str, compute: Callable[[], Optional[T]]) -> Optional[T]:
        if scope == self._scope and name in self._entries:
            log.debug("completion_details_cache_hit", scope=scope, name=name)
            return self._entries[name]

        value = compute()
        if scope != self._scope:
            self._entries.clear()
            self._scope = scope
        self._entries[name] = value
        return value

    def clear(self):
        self._scope = None
        self._entries.clear()
