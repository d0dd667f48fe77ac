"""Combining structures: an associative binary operation together with its identity element,
optionally with an inverse. They carry no state of their own and are shared freely between
sequences.

Laws (for all a, b, c of the value type):
    combine(combine(a, b), c) == combine(a, combine(b, c))
    combine(identity(), a) == a == combine(a, identity())
    combine(a, inverse(a)) == identity()  # invertible structures only
"""

from enum import Enum
from functools import reduce
from math import inf
from operator import add, mul, neg
from typing import Any, Callable, Dict, Generic, Iterable, NamedTuple, Optional, TypeVar

from .exceptions import InvalidStructure, NotInvertible, assert_type
from .typing import Computable, Orderable

T = TypeVar("T")


class _Empty:

    """Identity element adjoined to the first/last structures.
    There is only one instance, `EMPTY`.
    """

    _instance: Optional["_Empty"] = None

    def __new__(cls) -> "_Empty":
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


class Kind(Enum):
    ALL = "all"
    ANY = "any"
    FIRST = "first"
    LAST = "last"
    MAX = "max"
    MIN = "min"
    SUM = "sum"
    PRODUCT = "product"
    CONCAT = "concat"


def _all(a: Any, b: Any) -> Any:
    return a and b


def _any(a: Any, b: Any) -> Any:
    return a or b


def _first(a: Any, b: Any) -> Any:
    return b if a is EMPTY else a


def _last(a: Any, b: Any) -> Any:
    return a if b is EMPTY else b


def _reciprocal(a: Computable) -> Computable:
    return 1 / a


class _Operations(NamedTuple):
    combine: Callable[[Any, Any], Any]
    identity: Any
    inverse: Optional[Callable[[Any], Any]]
    commutative: bool
    idempotent: bool


_OPERATIONS: Dict[Kind, _Operations] = {
    Kind.ALL: _Operations(_all, True, None, True, True),
    Kind.ANY: _Operations(_any, False, None, True, True),
    Kind.FIRST: _Operations(_first, EMPTY, None, False, True),
    Kind.LAST: _Operations(_last, EMPTY, None, False, True),
    Kind.MAX: _Operations(max, -inf, None, True, True),
    Kind.MIN: _Operations(min, inf, None, True, True),
    Kind.SUM: _Operations(add, 0, neg, True, False),
    # the reciprocal is only exact in fields, see `field`
    Kind.PRODUCT: _Operations(mul, 1, _reciprocal, True, False),
    Kind.CONCAT: _Operations(add, (), None, False, False),
}

_DEFAULT = object()


class CombiningStructure(Generic[T]):

    """Descriptor of how two values are merged into one.

    `kind` selects the operation from a closed set. `identity` overrides the default identity
    element, which is needed when the value type has a different neutral element,
    e.g. `CombiningStructure(Kind.MAX, identity="")` for strings or
    `CombiningStructure(Kind.CONCAT, identity=[])` for lists.
    `field` marks a product over a field (float, Fraction), which makes it invertible.
    Products over integers are never invertible because division is not exact.
    """

    __slots__ = ("kind", "field", "_combine", "_identity", "_inverse", "_commutative", "_idempotent")

    def __init__(self, kind: Kind, identity: Any = _DEFAULT, field: bool = False) -> None:
        assert_type("kind", kind, Kind)

        if field and kind is not Kind.PRODUCT:
            raise ValueError(f"`field` is only meaningful for {Kind.PRODUCT}, not {kind}")

        ops = _OPERATIONS[kind]

        self.kind = kind
        self.field = field
        self._combine = ops.combine
        self._identity = ops.identity if identity is _DEFAULT else identity
        if kind is Kind.PRODUCT and not field:
            self._inverse = None
        else:
            self._inverse = ops.inverse
        self._commutative = ops.commutative
        self._idempotent = ops.idempotent

    @property
    def invertible(self) -> bool:
        return self._inverse is not None

    @property
    def commutative(self) -> bool:
        return self._commutative

    @property
    def idempotent(self) -> bool:
        return self._idempotent

    def combine(self, a: T, b: T) -> T:
        return self._combine(a, b)

    def identity(self) -> T:
        return self._identity

    def has_inverse(self, a: T) -> bool:

        """Returns whether `a` has an inverse. In a field product `0` has none."""

        if self._inverse is None:
            return False
        if self.kind is Kind.PRODUCT:
            return a != 0
        return True

    def check_invertible(self, a: T) -> None:

        """Raises `NotInvertible` if `a` has no inverse under this structure."""

        if not self.has_inverse(a):
            raise NotInvertible(f"{a!r} has no inverse under {self!r}")

    def inverse(self, a: T) -> T:

        """Returns the element which combined with `a` yields the identity.
        Raises `InvalidStructure` if the structure has no inverse
        and `NotInvertible` if `a` has none.
        """

        if self._inverse is None:
            raise InvalidStructure(f"{self!r} is not invertible")

        # the identity is its own inverse, 1 / 1 would turn an int identity into a float
        if a == self._identity:
            return a

        self.check_invertible(a)
        return self._inverse(a)

    def inverse_combine(self, a: T, b: T) -> T:

        """Returns `combine(a, inverse(b))`."""

        return self._combine(a, self.inverse(b))

    def fold(self, values: Iterable[T]) -> T:

        """Combines `values` from left to right, starting at the identity."""

        return reduce(self._combine, values, self._identity)

    def pow(self, x: T, n: int) -> T:

        """Combines `x` with itself `n` times using exponentiation by squaring.
        pow(x, 0) is the identity.
        """

        assert_type("n", n, int)
        if n < 0:
            raise ValueError(f"n must be non-negative, not {n}")

        acc = self._identity
        while n:
            if n & 1:
                acc = self._combine(acc, x)
            x = self._combine(x, x)
            n >>= 1

        return acc

    def _key(self) -> tuple:
        return (self.kind, self.field, self._identity)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CombiningStructure):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self.kind, self.field))

    def __repr__(self) -> str:
        args = [str(self.kind)]
        if self._identity is not _OPERATIONS[self.kind].identity:
            args.append(f"identity={self._identity!r}")
        if self.field:
            args.append("field=True")
        return "CombiningStructure({})".format(", ".join(args))


ALL: CombiningStructure[bool] = CombiningStructure(Kind.ALL)
ANY: CombiningStructure[bool] = CombiningStructure(Kind.ANY)
FIRST: CombiningStructure[Any] = CombiningStructure(Kind.FIRST)
LAST: CombiningStructure[Any] = CombiningStructure(Kind.LAST)
MAX: CombiningStructure[Orderable] = CombiningStructure(Kind.MAX)
MIN: CombiningStructure[Orderable] = CombiningStructure(Kind.MIN)
SUM: CombiningStructure[Computable] = CombiningStructure(Kind.SUM)
PRODUCT: CombiningStructure[Computable] = CombiningStructure(Kind.PRODUCT)
FIELD_PRODUCT: CombiningStructure[Computable] = CombiningStructure(Kind.PRODUCT, field=True)
CONCAT: CombiningStructure[Any] = CombiningStructure(Kind.CONCAT)
