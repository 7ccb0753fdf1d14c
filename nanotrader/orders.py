"""Prices, orders and trades."""

from __future__ import annotations

import enum
import functools
import time
from dataclasses import dataclass, field

PRICE_SCALE = 1_000_000


def now() -> int:
    """Current timestamp in nanoseconds."""
    return time.time_ns()


@functools.total_ordering
class Price:
    """Fixed-point price with six decimal places."""

    __slots__ = ("_raw",)

    def __init__(self, value: float = 0.0) -> None:
        self._raw = int(round(value * PRICE_SCALE))

    @classmethod
    def from_raw(cls, raw: int) -> "Price":
        price = cls()
        price._raw = int(raw)
        return price

    def raw_value(self) -> int:
        return self._raw

    def to_float(self) -> float:
        return self._raw / PRICE_SCALE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return self._raw < other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Price({self.to_float()!r})"

    def __str__(self) -> str:
        return f"{self.to_float():g}"


class Side(enum.Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(enum.Enum):
    LIMIT = "limit"
    MARKET = "market"
    IOC = "ioc"
    FOK = "fok"


@dataclass(eq=False)
class Order:
    """An order; ``remaining_quantity`` falls as it is filled."""

    id: int
    symbol: int
    price: Price
    quantity: int
    side: Side
    type: OrderType = OrderType.LIMIT
    timestamp: int = field(default_factory=now)
    remaining_quantity: int = field(init=False)

    def __post_init__(self) -> None:
        self.remaining_quantity = self.quantity

    def fill(self, quantity: int) -> None:
        if quantity < 0 or quantity > self.remaining_quantity:
            raise ValueError(
                f"cannot fill {quantity} of order {self.id} "
                f"with {self.remaining_quantity} remaining"
            )
        self.remaining_quantity -= quantity

    def is_buy(self) -> bool:
        return self.side is Side.BUY

    def is_sell(self) -> bool:
        return self.side is Side.SELL

    def is_limit(self) -> bool:
        return self.type is OrderType.LIMIT

    def is_market(self) -> bool:
        return self.type is OrderType.MARKET

    def is_ioc(self) -> bool:
        return self.type is OrderType.IOC

    def is_fok(self) -> bool:
        return self.type is OrderType.FOK

    def is_filled(self) -> bool:
        return self.remaining_quantity == 0


@dataclass(frozen=True)
class Trade:
    """An execution between a resting maker order and an incoming taker order."""

    maker_order_id: int
    taker_order_id: int
    symbol: int
    price: Price
    quantity: int
    timestamp: int = field(default_factory=now)