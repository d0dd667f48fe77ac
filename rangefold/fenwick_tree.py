import logging
from enum import Enum
from typing import Iterable, List, TypeVar

from .exceptions import InvalidStructure, assert_choice
from .indexing import check_index, check_prefix, check_range
from .sequence import IndexedSequence
from .structures import CombiningStructure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UpdateMode(Enum):
    REPLACE = "replace"  # the value becomes the new element
    COMBINE = "combine"  # the value is combined into the current element


_UPDATE_MODES = frozenset(UpdateMode)


class FenwickTree(IndexedSequence[T]):

    """Binary indexed tree. Node `k` (1-based) holds the fold of the values in `(k - lsb(k), k]`,
    where `lsb(k)` is the lowest set bit of `k`.

    Node layout for 8 values:

        8: [1, 8]
        4: [1, 4]
        2: [1, 2]         6: [5, 6]
        1: [1]  3: [3]    5: [5]  7: [7]

    Point updates and range queries take O(log n).
    Range queries subtract prefixes, so the structure must be invertible and commutative,
    and every stored value must have an inverse: a field product rejects `0` with
    `NotInvertible` in `__init__`, `update` and `replace`, before anything is modified.
    """

    tree: List[T]

    def __init__(self, values: Iterable[T], structure: CombiningStructure[T]) -> None:
        IndexedSequence.__init__(self, structure)

        if not structure.invertible:
            raise InvalidStructure(f"FenwickTree requires an invertible structure, not {structure!r}")
        if not structure.commutative:
            raise InvalidStructure(f"FenwickTree requires a commutative structure, not {structure!r}")

        values = list(values)
        for value in values:
            structure.check_invertible(value)

        self.tree = values
        self.build()

        logger.debug("Built FenwickTree of length %d over %s", len(self), structure.kind)

    def build(self) -> None:

        """Turns the raw values in `self.tree` into tree nodes in O(n)."""

        combine = self.structure.combine
        t = self.tree
        n = len(t)

        for k in range(1, n + 1):
            parent = k + (k & -k)
            if parent <= n:
                t[parent - 1] = combine(t[parent - 1], t[k - 1])

    def __len__(self) -> int:
        return len(self.tree)

    def _combine_at(self, index: int, value: T) -> None:
        combine = self.structure.combine
        t = self.tree
        n = len(t)

        k = index + 1
        while k <= n:
            t[k - 1] = combine(t[k - 1], value)
            k += k & -k

    def update(self, index: int, value: T, mode: UpdateMode = UpdateMode.REPLACE) -> None:

        """Replaces the element at `index` with `value`, or combines `value` into it
        if `mode` is `UpdateMode.COMBINE`.
        """

        check_index(index, len(self))
        assert_choice("mode", mode, _UPDATE_MODES)
        self.structure.check_invertible(value)

        if mode is UpdateMode.REPLACE:
            structure = self.structure
            value = structure.combine(structure.inverse(self.get(index)), value)

        self._combine_at(index, value)

    def replace(self, index: int, value: T) -> T:

        """Replaces the element at `index` with `value` and returns the old element."""

        old = self.get(index)
        structure = self.structure
        structure.check_invertible(value)
        self._combine_at(index, structure.combine(structure.inverse(old), value))
        return old

    def prefix(self, end: int) -> T:

        """Returns the fold of `[0, end)`."""

        check_prefix(end, len(self))

        combine = self.structure.combine
        t = self.tree

        acc = self.structure.identity()
        while end > 0:
            acc = combine(acc, t[end - 1])
            end -= end & -end

        return acc

    def query(self, start: int, end: int) -> T:

        """Returns the fold of `[start, end)`."""

        check_range(start, end, len(self))

        structure = self.structure
        t = self.tree

        # 0-based [start, end) is 1-based (start, end]. Both descents meet at the node below
        # which the prefixes are equal, so only the differing parts are visited.
        acc = structure.identity()
        while start < end:
            acc = structure.combine(acc, t[end - 1])
            end -= end & -end

        while end < start:
            acc = structure.inverse_combine(acc, t[start - 1])
            start -= start & -start

        return acc

    def get(self, index: int) -> T:
        check_index(index, len(self))
        return self.query(index, index + 1)
