"""Limit order book for a single symbol, with FIFO queues per price level."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from nanotrader.orders import Order, Price


class PriceLevel:
    """Orders resting at one price, kept in arrival order."""

    def __init__(self, price: Optional[Price] = None) -> None:
        self.price = price if price is not None else Price()
        self.total_quantity = 0
        self._orders: Dict[int, Order] = {}

    def add_order(self, order: Order) -> None:
        """Append an order to the back of the queue."""
        self._orders[order.id] = order
        self.total_quantity += order.remaining_quantity

    def remove_order(self, order: Order) -> None:
        """Take an order out of the queue, wherever it stands."""
        if self._orders.pop(order.id, None) is not None:
            self.total_quantity -= order.remaining_quantity

    def update_quantity(self, order: Order, old_quantity: int) -> None:
        """Account for a change of an order's remaining quantity."""
        self.total_quantity += order.remaining_quantity - old_quantity

    def is_empty(self) -> bool:
        return not self._orders

    @property
    def head(self) -> Optional[Order]:
        """The oldest order at this level, or None when empty."""
        return next(iter(self._orders.values()), None)

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders.values())

    def __len__(self) -> int:
        return len(self._orders)

    def __repr__(self) -> str:
        return (
            f"PriceLevel(price={self.price!r}, orders={len(self)}, "
            f"total_quantity={self.total_quantity})"
        )


class OrderBook:
    """Bids and asks for one symbol, indexed by order id and by price."""

    def __init__(self, symbol: int) -> None:
        self._symbol = symbol
        self._buy_levels: Dict[int, PriceLevel] = {}
        self._sell_levels: Dict[int, PriceLevel] = {}
        self._orders: Dict[int, Order] = {}
        self._best_bid: Optional[Price] = None
        self._best_ask: Optional[Price] = None

    @property
    def symbol(self) -> int:
        return self._symbol

    def _levels_for(self, order: Order) -> Dict[int, PriceLevel]:
        return self._buy_levels if order.is_buy() else self._sell_levels

    @staticmethod
    def _best(levels: Dict[int, PriceLevel], highest: bool) -> Optional[Price]:
        raws = [raw for raw, level in levels.items() if not level.is_empty()]
        if not raws:
            return None
        return Price.from_raw(max(raws) if highest else min(raws))

    def add_order(self, order: Order) -> bool:
        """Rest an order in the book; False if its id is already present."""
        if order.id in self._orders:
            return False
        self._orders[order.id] = order

        levels = self._levels_for(order)
        raw = order.price.raw_value()
        level = levels.get(raw)
        if level is None:
            level = levels[raw] = PriceLevel(order.price)
        level.add_order(order)

        if order.is_buy():
            if self._best_bid is None or order.price > self._best_bid:
                self._best_bid = order.price
        elif self._best_ask is None or order.price < self._best_ask:
            self._best_ask = order.price
        return True

    def remove_order(self, order_id: int) -> bool:
        """Remove an order by id; False if it is not in the book."""
        order = self._orders.pop(order_id, None)
        if order is None:
            return False

        levels = self._levels_for(order)
        raw = order.price.raw_value()
        level = levels.get(raw)
        if level is not None:
            level.remove_order(order)
            if level.is_empty():
                del levels[raw]
                if order.is_buy():
                    if self._best_bid == order.price:
                        self._best_bid = self._best(self._buy_levels, highest=True)
                elif self._best_ask == order.price:
                    self._best_ask = self._best(self._sell_levels, highest=False)
        return True

    def update_order_quantity(self, order_id: int, old_quantity: int) -> None:
        """Refresh level totals after an order's remaining quantity changed."""
        order = self._orders.get(order_id)
        if order is None:
            return
        level = self._levels_for(order).get(order.price.raw_value())
        if level is not None:
            level.update_quantity(order, old_quantity)

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def best_bid(self) -> Optional[Price]:
        return self._best_bid

    def best_ask(self) -> Optional[Price]:
        return self._best_ask

    def has_best_bid(self) -> bool:
        return self._best_bid is not None

    def has_best_ask(self) -> bool:
        return self._best_ask is not None

    def buy_level(self, price: Price) -> Optional[PriceLevel]:
        return self._buy_levels.get(price.raw_value())

    def sell_level(self, price: Price) -> Optional[PriceLevel]:
        return self._sell_levels.get(price.raw_value())

    def __len__(self) -> int:
        return len(self._orders)

    @staticmethod
    def _depth(
        levels: Dict[int, PriceLevel], depth: int, descending: bool
    ) -> List[Tuple[Price, int]]:
        ranked = sorted(
            (raw, level.total_quantity)
            for raw, level in levels.items()
            if not level.is_empty()
        )
        if descending:
            ranked.reverse()
        return [(Price.from_raw(raw), qty) for raw, qty in ranked[: max(depth, 0)]]

    def bid_levels(self, depth: int) -> List[Tuple[Price, int]]:
        """Up to ``depth`` (price, quantity) pairs, highest bid first."""
        return self._depth(self._buy_levels, depth, descending=True)

    def ask_levels(self, depth: int) -> List[Tuple[Price, int]]:
        """Up to ``depth`` (price, quantity) pairs, lowest ask first."""
        return self._depth(self._sell_levels, depth, descending=False)

    def clear(self) -> None:
        self._buy_levels.clear()
        self._sell_levels.clear()
        self._orders.clear()
        self._best_bid = None
        self._best_ask = None