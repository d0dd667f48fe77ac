import logging
from typing import Iterable, List, TypeVar

from .indexing import check_index, check_range, next_power_of_two
from .sequence import IndexedSequence
from .structures import CombiningStructure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SegmentTree(IndexedSequence[T]):

    """Complete binary tree over the values. Works with any associative structure,
    commutative or not, because queries never subtract.

    Node indices for 4 leaves (node 0 is unused):

                1
          2           3
       4     5     6     7
      v0    v1    v2    v3

    The children of node `k` are `2k` and `2k + 1`, leaf `i` is node `size + i`.
    Leaves past the length hold the identity. Updates and queries take O(log n).
    """

    # adapted from https://codeforces.com/blog/entry/18051

    t: List[T]

    def __init__(self, values: Iterable[T], structure: CombiningStructure[T]) -> None:
        IndexedSequence.__init__(self, structure)

        leaves = list(values)
        identity = structure.identity()

        self.n = len(leaves)
        self.size = next_power_of_two(self.n)
        self.t = [identity] * self.size + leaves + [identity] * (self.size - self.n)
        self.build()

        logger.debug("Built SegmentTree of length %d (%d leaves) over %s", self.n, self.size, structure.kind)

    def build(self) -> None:
        combine = self.structure.combine
        t = self.t

        i = self.size - 1
        while i > 0:
            t[i] = combine(t[i << 1], t[i << 1 | 1])
            i -= 1

    def __len__(self) -> int:
        return self.n

    def get(self, index: int) -> T:
        check_index(index, self.n)
        return self.t[index + self.size]

    def update(self, index: int, value: T) -> None:

        """Replaces the value at `index` and recomputes its ancestors."""

        check_index(index, self.n)

        combine = self.structure.combine
        t = self.t

        p = index + self.size
        t[p] = value

        while p > 1:
            p >>= 1
            t[p] = combine(t[p << 1], t[p << 1 | 1])

    def query(self, start: int, end: int) -> T:

        """Returns the fold of `[start, end)`."""

        check_range(start, end, self.n)

        combine = self.structure.combine
        t = self.t

        left = right = self.structure.identity()
        start += self.size
        end += self.size

        while start < end:
            if start & 1:
                left = combine(left, t[start])
                start += 1
            if end & 1:
                end -= 1
                right = combine(t[end], right)

            start >>= 1
            end >>= 1

        return combine(left, right)
