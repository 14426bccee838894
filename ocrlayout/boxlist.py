"""A doubly linked object list that tolerates removal while it is being iterated."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class _Node:
    __slots__ = ("item", "prev", "next", "removed")

    def __init__(self, item: Any = None) -> None:
        self.item = item
        self.prev: Optional[_Node] = None
        self.next: Optional[_Node] = None
        self.removed = False


class ObjectList(Generic[T]):
    """Ordered list of objects, looked up by identity.

    Iteration may be nested, and items may be removed while loops are
    running: a loop whose current item was removed carries on with the item
    that followed it, and removed items that a loop has not reached yet are
    skipped.  When the same object is stored twice, lookups find the first.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._head = _Node()
        self._tail = _Node()
        self._head.next = self._tail
        self._tail.prev = self._head
        self._count = 0
        for item in items:
            self.append(item)

    def _find(self, item: Any) -> Optional[_Node]:
        node = self._head.next
        while node is not self._tail:
            if node.item is item:
                return node
            node = node.next
        return None

    @staticmethod
    def _check_item(item: Any) -> None:
        if item is None:
            raise ValueError("None cannot be stored in an ObjectList")

    def _link_before(self, anchor: _Node, item: T) -> None:
        node = _Node(item)
        node.prev = anchor.prev
        node.next = anchor
        anchor.prev.next = node
        anchor.prev = node
        self._count += 1

    def append(self, item: T) -> None:
        """Add an item at the end."""
        self._check_item(item)
        self._link_before(self._tail, item)

    def insert_before(self, before: Optional[T], item: T) -> None:
        """Insert an item in front of another; append if before is None or the list is empty."""
        self._check_item(item)
        if before is None or not self._count:
            self.append(item)
            return
        anchor = self._find(before)
        if anchor is None:
            raise ValueError("reference item is not in the list")
        self._link_before(anchor, item)

    def remove(self, item: T) -> None:
        """Remove the first occurrence of an item."""
        self._check_item(item)
        node = self._find(item)
        if node is None:
            raise ValueError("item is not in the list")
        node.prev.next = node.next
        node.next.prev = node.prev
        node.removed = True
        node.next = None
        self._count -= 1

    def next_of(self, item: T) -> Optional[T]:
        """The item after the given one, None at the end or if it is absent."""
        node = self._find(item)
        if node is None:
            return None
        return node.next.item

    def prev_of(self, item: T) -> Optional[T]:
        """The item before the given one, None at the start or if it is absent."""
        node = self._find(item)
        if node is None:
            return None
        return node.prev.item

    def sort(self, compare: Callable[[T, T], int]) -> None:
        """Stable sort with a three-way comparison function."""
        ordered = sorted(self, key=cmp_to_key(compare))
        node = self._head.next
        for item in ordered:
            node.item = item
            node = node.next

    def clear(self) -> None:
        """Remove every item; running loops stop."""
        node = self._head.next
        while node is not self._tail:
            following = node.next
            node.removed = True
            node.prev = self._head
            node.next = None
            node = following
        self._head.next = self._tail
        self._tail.prev = self._head
        self._count = 0

    def __iter__(self) -> Iterator[T]:
        node = self._head.next
        while node is not self._tail:
            yield node.item
            while node.removed:
                node = node.prev
            node = node.next

    def __len__(self) -> int:
        return self._count

    def __contains__(self, item: object) -> bool:
        return item is not None and self._find(item) is not None

    def __repr__(self) -> str:
        return f"ObjectList({list(self)!r})"