# vending/models.py
import math
import uuid
from decimal import Decimal, InvalidOperation
from enum import Enum
from numbers import Real
from typing import Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, Field

from .errors import InvalidInput

Amount = Union[int, float, Decimal]


class Denomination(float, Enum):
    """Coin face values the machine accepts, largest first."""
    FIVE = 5.0
    THREE = 3.0
    TWO = 2.0
    ONE = 1.0
    HALF = 0.5
    QUARTER = 0.25

    @property
    def amount(self) -> Decimal:
        return Decimal(str(self.value))

    @classmethod
    def parse(cls, value) -> "Denomination":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidInput(f"unknown denomination: {value!r}")
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                raise InvalidInput(f"unknown denomination: {value!r}")
        if not isinstance(value, (Real, Decimal)):
            raise InvalidInput(f"unknown denomination: {value!r}")
        try:
            return cls(float(value))
        except ValueError:
            raise InvalidInput(f"unknown denomination: {value!r}")


# descending order, never mutated at runtime
DENOMINATIONS: Tuple[Denomination, ...] = tuple(Denomination)


def is_amount(value) -> bool:
    """True for a finite real number that is not a bool."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def to_decimal(value: Amount) -> Decimal:
    if not is_amount(value):
        raise InvalidInput(f"amount must be a finite number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise InvalidInput(f"amount must be a finite number, got {value!r}")


def _check_count(count) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidInput(f"coin count must be a whole number, got {count!r}")
    if count < 0:
        raise InvalidInput(f"coin count must be >= 0, got {count}")
    return count


class CoinBag(dict):
    """
    Counts of coins per denomination.

    Keys are always Denomination members and counts are never negative.
    Zero counts are dropped so an empty bag compares equal to {}.
    """

    def __init__(self, coins: Optional[Union[Dict, Iterable]] = None):
        super().__init__()
        if coins is None:
            return
        items = coins.items() if isinstance(coins, dict) else coins
        for denomination, count in items:
            denomination = Denomination.parse(denomination)
            count = _check_count(count)
            if count:
                super().__setitem__(denomination, self.get(denomination, 0) + count)

    def __setitem__(self, denomination, count):
        denomination = Denomination.parse(denomination)
        count = _check_count(count)
        if count:
            super().__setitem__(denomination, count)
        else:
            self.pop(denomination, None)

    def __missing__(self, denomination):
        return 0

    def update(self, *args, **kwargs) -> None:
        # validate everything before touching the bag
        pairs = [
            (Denomination.parse(d), _check_count(n))
            for d, n in dict(*args, **kwargs).items()
        ]
        for denomination, count in pairs:
            self[denomination] = count

    def setdefault(self, denomination, count: int = 0) -> int:
        denomination = Denomination.parse(denomination)
        if denomination not in self:
            self[denomination] = count
        return self[denomination]

    def __ior__(self, other) -> "CoinBag":
        self.update(other)
        return self

    def __or__(self, other) -> "CoinBag":
        out = self.copy()
        out.update(other)
        return out

    def add(self, denomination, count: int = 1) -> None:
        denomination = Denomination.parse(denomination)
        self[denomination] = self[denomination] + _check_count(count)

    def total(self) -> Decimal:
        return sum((d.amount * n for d, n in self.items()), Decimal(0))

    def copy(self) -> "CoinBag":
        return CoinBag(self)

    def __add__(self, other) -> "CoinBag":
        out = self.copy()
        for denomination, count in CoinBag(other).items():
            out.add(denomination, count)
        return out

    def __sub__(self, other) -> "CoinBag":
        out = self.copy()
        for denomination, count in CoinBag(other).items():
            remaining = out[denomination] - count
            if remaining < 0:
                raise InvalidInput(
                    f"cannot remove {count} x {denomination.value}, only {out[denomination]} held"
                )
            out[denomination] = remaining
        return out

    def as_dict(self) -> Dict[str, int]:
        return {str(d.value): self[d] for d in DENOMINATIONS if self[d]}

    def __repr__(self) -> str:
        inner = ", ".join(f"{d.value}: {self[d]}" for d in DENOMINATIONS if self[d])
        return f"CoinBag({{{inner}}})"


class Product(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    quantity: int = Field(ge=0)
    price: float = Field(ge=0, allow_inf_nan=False)

    def available(self) -> bool:
        return self.quantity > 0

    def increment(self, by: int) -> "Product":
        if isinstance(by, bool) or not isinstance(by, int):
            raise InvalidInput("increment must be a whole number")
        self.quantity = max(0, self.quantity + by)
        return self

    def decrement(self, by: int) -> "Product":
        if isinstance(by, bool) or not isinstance(by, int):
            raise InvalidInput("decrement must be a whole number")
        self.quantity = max(0, self.quantity - by)
        return self

    def label(self, with_price: bool = False, with_quantity: bool = False) -> str:
        details = []
        if with_price:
            details.append(f"Price: {self.price}")
        if with_quantity:
            details.append(f"Quantity: {self.quantity}")
        if not details:
            return self.name
        return f"{self.name} ({', '.join(details)})"
