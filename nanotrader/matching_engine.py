"""Price-time priority matching over one order book per symbol."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from nanotrader.order_book import OrderBook
from nanotrader.orders import Order, Trade, now
from nanotrader.pool import PoolAllocator
from nanotrader.ring_buffer import SPSCRingBuffer

BUFFER_SIZE = 65536
DEFAULT_CAPACITY = 1_000_000


class RequestType(enum.Enum):
    ADD = "add"
    CANCEL = "cancel"
    MODIFY = "modify"


class MatchStatus(enum.Enum):
    ADDED = "added"
    MATCHED = "matched"
    CANCELLED = "cancelled"
    MODIFIED = "modified"
    REJECTED = "rejected"


@dataclass
class OrderRequest:
    """A request to add, cancel or modify an order."""

    type: RequestType
    order: Order
    new_quantity: int = 0


@dataclass
class MatchResult:
    """Outcome of one request, with any trades it caused."""

    status: MatchStatus
    order_id: int
    trades: List[Trade] = field(default_factory=list)


class MatchingEngine:
    """Queues requests, matches them and queues the results."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._order_books: Dict[int, OrderBook] = {}
        self._allocator: PoolAllocator[Order] = PoolAllocator(copy.copy, capacity)
        self._input: SPSCRingBuffer[OrderRequest] = SPSCRingBuffer(BUFFER_SIZE)
        self._output: SPSCRingBuffer[MatchResult] = SPSCRingBuffer(BUFFER_SIZE)
        self._processed = 0
        self._running = False

    def _book(self, symbol: int) -> OrderBook:
        book = self._order_books.get(symbol)
        if book is None:
            book = self._order_books[symbol] = OrderBook(symbol)
        return book

    def _match(self, book: OrderBook, incoming: Order, trades: List[Trade]) -> None:
        buying = incoming.is_buy()
        while incoming.remaining_quantity > 0:
            best = book.best_ask() if buying else book.best_bid()
            if best is None:
                break
            crosses = incoming.price >= best if buying else incoming.price <= best
            if not (incoming.is_market() or crosses):
                break
            level = book.sell_level(best) if buying else book.buy_level(best)
            resting = level.head if level is not None else None
            if resting is None:
                break

            fill = min(incoming.remaining_quantity, resting.remaining_quantity)
            trades.append(
                Trade(resting.id, incoming.id, incoming.symbol, best, fill, now())
            )
            old_quantity = resting.remaining_quantity
            resting.fill(fill)
            incoming.fill(fill)

            if resting.is_filled():
                book.remove_order(resting.id)
                self._allocator.destroy(resting)
            else:
                book.update_order_quantity(resting.id, old_quantity)

    def _add(self, request: OrderRequest) -> MatchResult:
        incoming = request.order
        book = self._book(incoming.symbol)
        try:
            order = self._allocator.construct(incoming)
        except MemoryError:
            return MatchResult(MatchStatus.REJECTED, incoming.id)

        result = MatchResult(MatchStatus.ADDED, incoming.id)
        best_ask, best_bid = book.best_ask(), book.best_bid()
        if (
            incoming.is_market()
            or (incoming.is_buy() and best_ask is not None and incoming.price >= best_ask)
            or (incoming.is_sell() and best_bid is not None and incoming.price <= best_bid)
        ):
            self._match(book, order, result.trades)
            if result.trades:
                result.status = MatchStatus.MATCHED

        if order.remaining_quantity > 0 and not order.is_ioc() and not order.is_fok():
            if not book.add_order(order):
                self._allocator.destroy(order)
        elif order.is_fok() and order.remaining_quantity > 0:
            result.status = MatchStatus.REJECTED
            result.trades.clear()
            self._allocator.destroy(order)
        else:
            self._allocator.destroy(order)
        return result

    def _cancel(self, request: OrderRequest) -> MatchResult:
        book = self._book(request.order.symbol)
        order = book.get_order(request.order.id)
        if order is None:
            return MatchResult(MatchStatus.REJECTED, request.order.id)
        book.remove_order(order.id)
        self._allocator.destroy(order)
        return MatchResult(MatchStatus.CANCELLED, request.order.id)

    def _modify(self, request: OrderRequest) -> MatchResult:
        book = self._book(request.order.symbol)
        order = book.get_order(request.order.id)
        if order is None:
            return MatchResult(MatchStatus.REJECTED, request.order.id)
        if request.new_quantity == 0:
            book.remove_order(order.id)
            self._allocator.destroy(order)
            return MatchResult(MatchStatus.CANCELLED, request.order.id)

        old_quantity = order.remaining_quantity
        order.remaining_quantity = request.new_quantity
        order.quantity = request.new_quantity
        book.update_order_quantity(order.id, old_quantity)
        return MatchResult(MatchStatus.MODIFIED, request.order.id)

    def submit_order(self, request: OrderRequest) -> bool:
        """Queue a request; False when the input queue is full."""
        return self._input.try_push(request)

    def get_result(self) -> Optional[MatchResult]:
        """The oldest pending result, or None when there is none."""
        return self._output.try_pop()

    def results(self) -> Iterator[MatchResult]:
        """Drain and yield every pending result."""
        while (result := self._output.try_pop()) is not None:
            yield result

    def process_orders(self) -> None:
        """Handle every queued request, stopping if the output queue fills."""
        handlers = {
            RequestType.ADD: self._add,
            RequestType.CANCEL: self._cancel,
            RequestType.MODIFY: self._modify,
        }
        while (request := self._input.try_pop()) is not None:
            result = handlers[request.type](request)
            if not self._output.try_push(result):
                break
            self._processed += 1

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def processed_orders(self) -> int:
        return self._processed

    def get_order_book(self, symbol: int) -> Optional[OrderBook]:
        return self._order_books.get(symbol)

    def order_book_count(self) -> int:
        return len(self._order_books)

    def total_orders(self) -> int:
        return sum(len(book) for book in self._order_books.values())

    def available_order_capacity(self) -> int:
        return self._allocator.available_count()

    def clear_all_books(self) -> None:
        self._order_books.clear()
        self._processed = 0