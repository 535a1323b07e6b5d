#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Binary min-heap with an injected comparator (CLRS ch. 6 layout on a list).

Unlike `heapq`, elements can be located and removed by value or by predicate,
which the LPA* engine needs to find cells by coordinate rather than by
priority. Those operations are linear scans.

compare(a, b) is True when `a` should pop before `b`. Swaps only happen on a
strict comparator result, so among equal elements the earlier one wins.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from .errors import Underflow

T = TypeVar("T")
Compare = Callable[[T, T], bool]
Predicate = Callable[[T], bool]


def _parent(i: int) -> int:
    return (i - 1) // 2


class PriorityQueue(Generic[T]):
    def __init__(self, compare: Compare, items: Optional[Iterable[T]] = None):
        self._compare = compare
        self._seq: List[T] = list(items) if items is not None else []
        if self._seq:
            self._build_heap()

    # ------------------------------ inspection ------------------------------ #

    def top(self) -> T:
        if not self._seq:
            raise Underflow("top() on an empty queue")
        return self._seq[0]

    def size(self) -> int:
        return len(self._seq)

    def empty(self) -> bool:
        return not self._seq

    def __len__(self) -> int:
        return len(self._seq)

    def __iter__(self) -> Iterator[T]:
        """Heap order, not priority order."""
        return iter(list(self._seq))

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def contains(self, value: T) -> bool:
        return value in self._seq

    def any(self, predicate: Predicate) -> bool:
        return any(predicate(v) for v in self._seq)

    # ------------------------------ mutation -------------------------------- #

    def push(self, value: T) -> None:
        # Move parents down until value's slot is found, then write once
        self._seq.append(value)
        curr = len(self._seq) - 1
        while curr > 0 and self._compare(value, self._seq[_parent(curr)]):
            self._seq[curr] = self._seq[_parent(curr)]
            curr = _parent(curr)
        self._seq[curr] = value

    def pop(self) -> T:
        if not self._seq:
            raise Underflow("pop() on an empty queue")
        popped = self._seq[0]
        last = self._seq.pop()
        if self._seq:
            self._seq[0] = last
            self._sift_down(0, len(self._seq))
        return popped

    def remove(self, value: T) -> None:
        """Remove the first element equal to `value`; no-op when absent."""
        for i, v in enumerate(self._seq):
            if v == value:
                self._remove_at(i)
                return

    def remove_if(self, predicate: Predicate) -> bool:
        """Remove the first element matching `predicate`. Returns True if one was removed."""
        for i, v in enumerate(self._seq):
            if predicate(v):
                self._remove_at(i)
                return True
        return False

    def substitute(self, old_value: T, new_value: T) -> None:
        self.remove(old_value)
        self.push(new_value)

    def update_with_if(self, new_value: T, predicate: Predicate) -> None:
        """Replace the first element matching `predicate` if `new_value` pops before it."""
        for v in self._seq:
            if predicate(v):
                if self._compare(new_value, v):
                    self.substitute(v, new_value)
                return

    def reset(self, compare: Optional[Compare] = None) -> None:
        if compare is not None:
            self._compare = compare
        self._seq.clear()

    # ------------------------------ internals ------------------------------- #

    def _remove_at(self, i: int) -> None:
        seq = self._seq
        last = len(seq) - 1
        seq[i], seq[last] = seq[last], seq[i]
        seq.pop()
        if i < len(seq) and not self._sift_up(i):
            # The replacement may be larger than the removed element
            self._sift_down(i, len(seq))

    def _sift_up(self, i: int) -> bool:
        seq = self._seq
        moved = False
        while i > 0 and self._compare(seq[i], seq[_parent(i)]):
            p = _parent(i)
            seq[i], seq[p] = seq[p], seq[i]
            i = p
            moved = True
        return moved

    def _sift_down(self, i: int, size: int) -> None:
        seq = self._seq
        while True:
            left = 2 * i + 1
            right = left + 1
            smallest = i
            if left < size and self._compare(seq[left], seq[smallest]):
                smallest = left
            if right < size and self._compare(seq[right], seq[smallest]):
                smallest = right
            if smallest == i:
                return
            seq[i], seq[smallest] = seq[smallest], seq[i]
            i = smallest

    def _build_heap(self) -> None:
        size = len(self._seq)
        for i in reversed(range(size // 2)):
            self._sift_down(i, size)

    def __repr__(self) -> str:
        return f"PriorityQueue(size={len(self._seq)})"


__all__ = ["PriorityQueue"]
