import logging
from typing import Iterable, List, TypeVar

from .exceptions import InvalidStructure
from .indexing import check_index, check_prefix, check_range
from .sequence import IndexedSequence
from .structures import CombiningStructure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CumulativeSum(IndexedSequence[T]):

    """Prefix aggregates of a sequence.
    Range queries take O(1) by taking the difference of two prefixes,
    which requires an invertible structure. Updates take O(n).

    Every stored value must have an inverse, so a field product rejects `0`
    with `NotInvertible` in `__init__`, `update` and `append`.
    """

    # prefixes[k] is the fold of the first k values
    prefixes: List[T]

    def __init__(self, values: Iterable[T], structure: CombiningStructure[T]) -> None:
        IndexedSequence.__init__(self, structure)

        if not structure.invertible:
            raise InvalidStructure(f"CumulativeSum requires an invertible structure, not {structure!r}")

        values = list(values)
        for value in values:
            structure.check_invertible(value)

        acc = structure.identity()
        self.prefixes = [acc]
        for value in values:
            acc = structure.combine(acc, value)
            self.prefixes.append(acc)

        logger.debug("Built CumulativeSum of length %d over %s", len(self), structure.kind)

    def __len__(self) -> int:
        return len(self.prefixes) - 1

    def append(self, value: T) -> None:

        """Appends `value` to the end of the sequence in O(1)."""

        self.structure.check_invertible(value)
        self.prefixes.append(self.structure.combine(self.prefixes[-1], value))

    def prefix(self, end: int) -> T:

        """Returns the fold of `[0, end)`."""

        check_prefix(end, len(self))
        return self.prefixes[end]

    def _difference(self, start: int, end: int) -> T:
        # [start, end) = [0, start)^-1 * [0, end)
        if start == 0:
            return self.prefixes[end]

        structure = self.structure
        return structure.combine(structure.inverse(self.prefixes[start]), self.prefixes[end])

    def query(self, start: int, end: int) -> T:

        """Returns the fold of `[start, end)`."""

        check_range(start, end, len(self))

        if start == end:
            return self.structure.identity()

        return self._difference(start, end)

    def get(self, index: int) -> T:
        check_index(index, len(self))
        return self._difference(index, index + 1)

    def update(self, index: int, value: T) -> None:

        """Replaces the value at `index` and recomputes all following prefixes in O(n)."""

        check_index(index, len(self))

        structure = self.structure
        structure.check_invertible(value)
        delta = structure.combine(structure.inverse(self.get(index)), value)

        logger.debug("Recomputing %d prefixes of CumulativeSum", len(self) - index)

        prefixes = self.prefixes
        for k in range(index + 1, len(prefixes)):
            prefixes[k] = structure.combine(prefixes[k], delta)
