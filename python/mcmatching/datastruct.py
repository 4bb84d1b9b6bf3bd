"""Data structures for matching."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Optional, TypeVar


_ValueT = TypeVar("_ValueT")


class EnumerableDisjointSet(Generic[_ValueT]):
    """Disjoint set (union-find) that can enumerate the members of a set.

    The universe consists of the elements 0 .. n-1.
    Initially every element is in a set by itself.

    The following operations can be done efficiently:
     - Find the representative of the set that contains a given element.
     - Merge two sets.
     - List all elements of a set, in time proportional to the size
       of the set.

    Sets are represented as trees of parent pointers, with union by rank
    and path compression. In addition, the elements of each set are kept
    in a singly linked list. The root of each tree knows the first and
    last element of its list, so that two lists can be concatenated
    in constant time.

    Each element may carry an arbitrary value.
    """

    __slots__ = ("parent", "rank", "first", "last", "next", "values")

    def __init__(self, size: int) -> None:
        """Initialize a disjoint set with "size" singleton sets.

        This function takes time O(n).

        Raises:
            ValueError: If "size" is not positive.
        """
        if size < 1:
            raise ValueError("Disjoint set must contain at least 1 element")

        # "parent[x]" is the parent of element "x" in its tree,
        # or "x" itself if "x" is a root.
        self.parent: list[int] = list(range(size))

        # "rank[x]" is an upper bound on the height of the tree below "x".
        self.rank: list[int] = size * [0]

        # For a root "x",
        # "first[x]" is the first element in the member list of its set;
        # "last[x]" is the last element in the member list of its set.
        # These values are meaningless for non-root elements.
        self.first: list[int] = list(range(size))
        self.last: list[int] = list(range(size))

        # "next[x]" is the element following "x" in the member list,
        # or -1 if "x" is the last element of its set.
        self.next: list[int] = size * [-1]

        self.values: list[Optional[_ValueT]] = size * [None]

    def __len__(self) -> int:
        return len(self.parent)

    def _check_index(self, x: int) -> None:
        if not 0 <= x < len(self.parent):
            raise IndexError(f"Element {x} out of range")

    def find(self, x: int) -> int:
        """Return the representative of the set that contains "x".

        This function takes amortized time O(alpha(n)).
        """
        self._check_index(x)
        parent = self.parent

        # Find the root.
        root = x
        while parent[root] != root:
            root = parent[root]

        # Compress the path.
        while parent[x] != root:
            (parent[x], x) = (root, parent[x])

        return root

    def union(self, x: int, y: int) -> int:
        """Merge the sets that contain "x" and "y".

        The member list of the absorbed set is appended to the member list
        of the surviving set.

        This function takes amortized time O(alpha(n)).

        Returns:
            Representative of the merged set.
        """
        rx = self.find(x)
        ry = self.find(y)
        if rx == ry:
            return rx

        # Attach the lower-rank tree below the higher-rank tree.
        if self.rank[rx] > self.rank[ry]:
            (rx, ry) = (ry, rx)
        elif self.rank[rx] == self.rank[ry]:
            self.rank[ry] += 1

        # Now "ry" survives and "rx" is absorbed.
        self.parent[rx] = ry
        self.next[self.last[ry]] = self.first[rx]
        self.last[ry] = self.last[rx]

        return ry

    def first_member(self, root: int) -> int:
        """Return the first element in the member list of a set.

        Parameters:
            root: Representative of the set.
        """
        self._check_index(root)
        assert self.parent[root] == root
        return self.first[root]

    def next_member(self, x: int) -> int:
        """Return the element following "x" in its member list,
        or -1 if "x" is the last element of its set."""
        self._check_index(x)
        return self.next[x]

    def members(self, x: int) -> Iterator[int]:
        """Iterate over all elements in the set that contains "x".

        Merging sets while the iteration is in progress is not supported.

        A complete iteration takes time O(k), where "k" is the number of
        elements in the set.
        """
        y = self.first_member(self.find(x))
        while y != -1:
            yield y
            y = self.next[y]

    def class_size(self, x: int) -> int:
        """Return the number of elements in the set that contains "x"."""
        return sum(1 for _y in self.members(x))

    def value(self, x: int) -> Optional[_ValueT]:
        """Return the value attached to element "x"."""
        self._check_index(x)
        return self.values[x]

    def set_value(self, x: int, value: Optional[_ValueT]) -> None:
        """Attach a value to element "x"."""
        self._check_index(x)
        self.values[x] = value
