from typing import Any

from .exceptions import IndexOutOfRange, InvalidRange, assert_type


def assert_index(name: str, value: Any) -> None:

    """Checks that `value` is an integer index. `bool` is an `int` subclass but not an index."""

    if isinstance(value, bool):
        raise TypeError(f"{name} must be an int, not a bool")

    assert_type(name, value, int)


def check_index(index: int, length: int) -> None:

    """Checks that `index` addresses an existing element of a sequence of length `length`."""

    assert_index("index", index)

    if not 0 <= index < length:
        raise IndexOutOfRange(index, length)


def check_prefix(end: int, length: int) -> None:

    """Checks that `[0, end)` lies within a sequence of length `length`."""

    assert_index("end", end)

    if not 0 <= end <= length:
        raise IndexOutOfRange(end, length)


def check_range(start: int, end: int, length: int) -> None:

    """Checks the half-open range `[start, end)` against a sequence of length `length`.
    An inverted range is reported before any bounds violation.
    """

    assert_index("start", start)
    assert_index("end", end)

    if start > end:
        raise InvalidRange(start, end)
    if start < 0:
        raise IndexOutOfRange(start, length)
    if end > length:
        raise IndexOutOfRange(end, length)


def next_power_of_two(n: int) -> int:

    """Returns the smallest power of two which is greater than or equal to `n`.
    0 and 1 both map to 1.
    """

    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()
