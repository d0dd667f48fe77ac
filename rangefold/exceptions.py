from typing import Any, Set, Tuple, Type, TypeVar, Union

T = TypeVar("T")


class InvalidStructure(ValueError):
    """Raised when a combining structure lacks a capability the sequence needs,
    for example a prefix-difference sequence built over a structure without inverse.
    """


class NotInvertible(ValueError):
    """Raised when a value has no inverse under an otherwise invertible structure,
    like `0` under a field product. Sequences which need inverses reject such values
    before storing them.
    """


class IndexOutOfRange(IndexError):
    """Raised when an index or a range endpoint lies outside of the sequence.
    Indices are never wrapped or clamped.
    """

    def __init__(self, index: Any, length: int) -> None:
        IndexError.__init__(self, f"index out of bounds: the len is {length} but the index is {index}")
        self.index = index
        self.length = length


class InvalidRange(ValueError):
    """Raised when the start of a half-open range is greater than its end."""

    def __init__(self, start: int, end: int) -> None:
        ValueError.__init__(self, f"range start is greater than range end: [{start}, {end})")
        self.start = start
        self.end = end


def assert_choice(name: str, value: T, choices: Set[T]) -> None:
    if value not in choices:
        raise ValueError("{} must be one of {}".format(name, ", ".join(map(str, choices))))


def assert_type(name: str, value: Any, types: Union[Type[Any], Tuple[Type[Any], ...]]) -> None:
    if not isinstance(value, types):
        if not isinstance(types, tuple):
            types = (types,)
        raise TypeError(
            "{} must be one of these types: {}. Not: {}".format(name, ", ".join(map(str, types)), type(value))
        )
