from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class InFlightGuard:
    """
    Tracks keys with an outstanding write. A second submission for a key that is
    still being processed is turned away instead of racing the first one.
    """

    def __init__(self) -> None:
        self._keys: set[Hashable] = set()
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[bool]:
        with self._lock:
            acquired = key not in self._keys
            if acquired:
                self._keys.add(key)
        try:
            yield acquired
        finally:
            if acquired:
                with self._lock:
                    self._keys.discard(key)

    def is_held(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._keys
