import itertools
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)


class SeriesCache:
    """
    Read-through cache of raw series keyed by asset name.

    One instance is owned by the calling layer. At most one load per key is in
    flight: concurrent callers for the same key wait on the first caller's
    Future and receive its result or its exception. Failed loads are not
    cached.
    """

    def __init__(self, loader: Callable[[Hashable], Any]):
        self._loader = loader
        self._data: dict = {}
        self._inflight: dict[Hashable, Future] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Any:
        with self._lock:
            if key in self._data:
                return self._data[key]
            future = self._inflight.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._inflight[key] = future

        if not owner:
            logger.debug(f"Waiting on in-flight load for {key}")
            return future.result()
        return self._load(key, future)

    def _load(self, key: Hashable, future: Future) -> Any:
        try:
            value = self._loader(key)
        except Exception as e:
            with self._lock:
                self._inflight.pop(key, None)
            future.set_exception(e)
            logger.error(f"Loading {key} failed: {e}")
            raise
        with self._lock:
            self._data[key] = value
            self._inflight.pop(key, None)
        future.set_result(value)
        return value

    def peek(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def invalidate(self, key: Hashable | None = None) -> None:
        """Drop one cached key, or everything when key is None."""
        with self._lock:
            if key is None:
                self._data.clear()
            else:
                self._data.pop(key, None)

    def refresh(self, key: Hashable) -> Any:
        """Reload a key, keeping the old value visible until the new one lands."""
        with self._lock:
            future = self._inflight.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._inflight[key] = future
        if not owner:
            return future.result()
        return self._load(key, future)

    def keys(self) -> list:
        with self._lock:
            return list(self._data)

    def snapshot(self) -> dict:
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data


class SelectionTracker:
    """
    Last-write-wins bookkeeping for user selections.

    Each new selection gets a higher token from one shared counter; a result
    computed for an older token is stale and must be discarded, whatever order
    the results arrive in. A channel is forgotten once its latest selection
    finishes, so the map only holds selections still in progress.
    """

    def __init__(self):
        self._latest: dict[Hashable, int] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def begin(self, channel: Hashable) -> int:
        with self._lock:
            token = next(self._tokens)
            self._latest[channel] = token
            return token

    def is_current(self, channel: Hashable, token: int) -> bool:
        with self._lock:
            return self._latest.get(channel) == token

    def finish(self, channel: Hashable, token: int) -> bool:
        """Close a selection; True if it was still the latest on its channel."""
        with self._lock:
            if self._latest.get(channel) != token:
                return False
            del self._latest[channel]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)
