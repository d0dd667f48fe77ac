from abc import ABC, abstractmethod
from typing import Generic, Iterator, Tuple, TypeVar, Union

from .exceptions import assert_type
from .structures import CombiningStructure

T = TypeVar("T")


def slice_bounds(key: slice, length: int) -> Tuple[int, int]:

    """Converts a step-less slice to a half-open range. Omitted bounds default to the
    sequence bounds, negative bounds are passed on unchanged and rejected by the range check.
    """

    if key.step is not None:
        raise ValueError("Slices with a step are not supported")

    start = 0 if key.start is None else key.start
    end = length if key.stop is None else key.stop
    return start, end


class IndexedSequence(ABC, Generic[T]):

    """Fixed-length sequence which answers range folds of a combining structure.

    `seq[i]` is the current value at `i`, `seq[i:j]` the fold of `[i, j)`
    and `seq[i] = v` replaces the value at `i`.
    """

    structure: CombiningStructure[T]

    def __init__(self, structure: CombiningStructure[T]) -> None:
        assert_type("structure", structure, CombiningStructure)
        self.structure = structure

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get(self, index: int) -> T:
        raise NotImplementedError

    @abstractmethod
    def update(self, index: int, value: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def query(self, start: int, end: int) -> T:
        raise NotImplementedError

    def length(self) -> int:
        return len(self)

    def __getitem__(self, key: Union[int, slice]) -> T:
        if isinstance(key, slice):
            return self.query(*slice_bounds(key, len(self)))
        return self.get(key)

    def __setitem__(self, index: int, value: T) -> None:
        self.update(index, value)

    def __iter__(self) -> Iterator[T]:
        for i in range(len(self)):
            yield self.get(i)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self)!r}, {self.structure!r})"
