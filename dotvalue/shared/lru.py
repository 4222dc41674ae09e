from collections import OrderedDict
from typing import Generic, MutableMapping, Optional, TypeVar, cast

K = TypeVar("K")
V = TypeVar("V")


class LRU(Generic[K, V]):
    def __init__(self, size: int) -> None:
        assert size > 0
        self._size = size
        self._data: MutableMapping[K, V] = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: K) -> Optional[V]:
        if key in self._data:
            cast(OrderedDict, self._data).move_to_end(key)
            return self._data[key]
        else:
            return None

    def __setitem__(self, key: K, item: V) -> None:
        self._data[key] = item
        cast(OrderedDict, self._data).move_to_end(key)
        while len(self._data) > self._size:
            cast(OrderedDict, self._data).popitem(last=False)
