import random
from fractions import Fraction
from functools import wraps
from itertools import product, zip_longest
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar
from unittest import TestCase

from .structures import EMPTY, CombiningStructure, Kind

T = TypeVar("T")


class MyTestCase(TestCase):
    def assertIterEqual(self, first: Iterable, second: Iterable, msg: Optional[str] = None) -> None:
        for i, (a, b) in enumerate(zip_longest(first, second)):
            if msg:
                msg = " : " + str(msg)
            self.assertEqual(a, b, msg=f"in iteration index {i}: {msg}")

    def assertAllEqual(self, args: Iterable, msg: Optional[str] = None) -> None:
        it = iter(args)
        first = next(it)
        for second in it:
            self.assertEqual(first, second, msg)

    def assertFoldEqual(
        self, structure: CombiningStructure[T], values: Sequence[T], result: T, msg: Optional[str] = None
    ) -> None:
        """Compares `result` to the naive left-to-right fold of `values`."""

        self.assertEqual(structure.fold(values), result, msg)


def naive_fold(structure: CombiningStructure[T], values: List[T], start: int, end: int) -> T:
    acc = structure.identity()
    for i in range(start, end):
        acc = structure.combine(acc, values[i])
    return acc


def random_value(structure: CombiningStructure) -> Any:
    """Returns a random value of a type the structure can combine exactly."""

    kind = structure.kind

    if kind in (Kind.ALL, Kind.ANY):
        return random.random() < 0.5
    elif kind in (Kind.FIRST, Kind.LAST):
        return EMPTY if random.random() < 0.2 else random.randint(-100, 100)
    elif kind is Kind.CONCAT:
        return tuple(random.randint(0, 9) for _ in range(random.randint(0, 3)))
    elif kind is Kind.PRODUCT:
        if structure.field:
            return Fraction(random.choice((-1, 1)) * random.randint(1, 9), random.randint(1, 9))
        return random.randint(-3, 3)
    else:
        return random.randint(-1000, 1000)


def range_generator(size: int, tests: int) -> Iterator[Tuple[int, int]]:
    """Yields `tests` random half-open ranges within `[0, size]`, empty ones included."""

    for _ in range(tests):
        left = random.randint(0, size)
        right = random.randint(0, size)
        if left <= right:
            yield left, right
        else:
            yield right, left


def random_arguments(n: int, *funcs: Callable[[], Any]) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for i in range(n):
                with self.subTest(str(i)):
                    if func(self, *(f() for f in funcs)) is not None:
                        raise AssertionError

        return inner

    return decorator


# also called: parameterize
def parametrize(*args_list: tuple) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for args in args_list:
                with self.subTest(str(args)[:1000]):
                    if func(self, *args) is not None:
                        raise AssertionError

        return inner

    return decorator


def parametrize_product(*args_list: tuple) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for args in product(*args_list):
                with self.subTest(str(args)):
                    if func(self, *args) is not None:
                        raise AssertionError

        return inner

    return decorator


def repeat(number: int) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for i in range(number):
                if func(self) is not None:  # no self.subTest(str(i))
                    raise AssertionError

        return inner

    return decorator
