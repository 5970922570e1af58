"""Binary min-heap with an index map for decrease/increase key.

Items only need a hashable `key` and an ordered `value`:

    heap = IndexedHeap()
    heap.push(node)
    heap.push(better_node, PushAction.DECREASE_KEY)
    best = heap.pop()

The heap keeps a `key -> slot` map next to its array, so an item already in
the heap can be found and re-prioritised in O(log n).
"""

from enum import Enum
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Iterator,
    List,
    Optional,
    Protocol,
    TypeVar,
)


class HeapItem(Protocol):
    """Structural type for anything stored in an `IndexedHeap`."""

    @property
    def key(self) -> Hashable:
        ...

    @property
    def value(self) -> Any:
        ...


T = TypeVar("T", bound=HeapItem)


class PushAction(Enum):
    """What `push` does when an item with the same key is already stored."""

    KEEP = "keep"
    DECREASE_KEY = "decrease_key"
    INCREASE_KEY = "increase_key"


class IndexedHeap(Generic[T]):
    """Min-heap on `item.value`, addressable by `item.key`."""

    _items: List[T]
    _index: Dict[Hashable, int]

    def __init__(self) -> None:
        self._items = []
        self._index = {}

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[T]:
        """Iterate over stored items in array order (not sorted)."""

        return iter(list(self._items))

    def peek(self) -> Optional[T]:
        """Return the minimum item without removing it."""

        return self._items[0] if self._items else None

    def get(self, key: Hashable) -> Optional[T]:
        """Return the stored item for `key`, or None."""

        slot = self._index.get(key)
        if slot is None:
            return None
        return self._items[slot]

    def index_of(self, key: Hashable) -> Optional[int]:
        """Return the array slot recorded for `key`, or None."""

        return self._index.get(key)

    def _swap(self, i: int, j: int) -> None:
        # Array and map are updated together; nothing reads either in between.
        a = self._items[i]
        b = self._items[j]
        self._items[i] = b
        self._items[j] = a
        self._index[b.key] = i
        self._index[a.key] = j

    def _sift_up(self, slot: int) -> None:
        items = self._items
        while slot > 0:
            parent = (slot - 1) // 2
            if not items[slot].value < items[parent].value:
                return
            self._swap(slot, parent)
            slot = parent

    def _sift_down(self, slot: int) -> None:
        items = self._items
        size = len(items)
        while True:
            left = 2 * slot + 1
            if left >= size:
                return
            child = left
            right = left + 1
            if right < size and items[right].value < items[left].value:
                child = right
            if not items[child].value < items[slot].value:
                return
            self._swap(slot, child)
            slot = child

    def push(self, item: T, action: PushAction = PushAction.KEEP) -> bool:
        """Insert `item`, or resolve a key conflict according to `action`.

        Returns True when the item was inserted or replaced an existing one.
        """

        slot = self._index.get(item.key)
        if slot is None:
            slot = len(self._items)
            self._items.append(item)
            self._index[item.key] = slot
            self._sift_up(slot)
            return True

        current = self._items[slot]
        if action is PushAction.KEEP:
            return False
        if action is PushAction.DECREASE_KEY:
            if not item.value < current.value:
                return False
            self._items[slot] = item
            self._sift_up(slot)
            return True
        if action is PushAction.INCREASE_KEY:
            if not current.value < item.value:
                return False
            self._items[slot] = item
            self._sift_down(slot)
            return True
        raise ValueError(f"Unknown push action: {action!r}")

    def pop(self) -> Optional[T]:
        """Remove and return the item with the smallest value."""

        if not self._items:
            return None

        last = len(self._items) - 1
        if last:
            self._swap(0, last)
        result = self._items.pop()
        del self._index[result.key]

        if self._items:
            self._sift_down(0)
        return result
