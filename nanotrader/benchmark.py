"""Timing runs for order book insertion and price comparison."""

from __future__ import annotations

import argparse
import random
import sys
import time
from typing import Optional, Sequence, TextIO

from nanotrader.order_book import OrderBook
from nanotrader.orders import Order, OrderType, Price, Side, now

DEFAULT_ORDER_COUNTS = (1000, 10000, 100000)
DEFAULT_PRICE_OPS = 10_000_000


class SimpleBenchmark:
    """Generates random orders and prices and times operations on them."""

    def __init__(self, seed: int = 42, out: Optional[TextIO] = None) -> None:
        self._rng = random.Random(seed)
        self._out = out

    @property
    def _stream(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _price(self) -> float:
        return self._rng.uniform(99.0, 101.0)

    def generate_order(self, order_id: int, symbol: int) -> Order:
        """A random limit order priced between 99 and 101."""
        price = self._price()
        qty = self._rng.randint(100, 5000)
        side = Side.BUY if self._rng.randint(0, 1) == 0 else Side.SELL
        return Order(order_id, symbol, Price(price), qty, side, OrderType.LIMIT, now())

    def benchmark_order_book(self, num_orders: int) -> OrderBook:
        """Time adding ``num_orders`` random orders to a book; return the book."""
        if num_orders < 1:
            raise ValueError("num_orders must be at least 1")
        out = self._stream
        print("\n=== Order Book Benchmark ===", file=out)
        print(f"Orders to process: {num_orders}", file=out)

        book = OrderBook(1)
        print("Generating orders...", file=out)
        orders = [self.generate_order(i, 1) for i in range(1, num_orders + 1)]

        start = time.perf_counter_ns()
        for order in orders:
            book.add_order(order)
        duration = max(time.perf_counter_ns() - start, 1)

        print("\nResults:", file=out)
        print(f"Total time: {duration / 1e6:g} ms", file=out)
        print(f"Average latency: {duration / num_orders:g} ns per order", file=out)
        print(f"Throughput: {int(num_orders * 1e9 / duration)} orders/sec", file=out)

        print("\nFinal order book state:", file=out)
        print(f"Total orders: {len(book)}", file=out)
        bid, ask = book.best_bid(), book.best_ask()
        if bid is not None:
            print(f"Best bid: ${bid.to_float():g}", file=out)
        if ask is not None:
            print(f"Best ask: ${ask.to_float():g}", file=out)

        print("\nTop 3 bid levels:", file=out)
        for price, qty in book.bid_levels(3):
            print(f"  ${price.to_float():g} - {qty} shares", file=out)
        print("\nTop 3 ask levels:", file=out)
        for price, qty in book.ask_levels(3):
            print(f"  ${price.to_float():g} - {qty} shares", file=out)
        return book

    def benchmark_price_operations(self, num_ops: int = DEFAULT_PRICE_OPS) -> int:
        """Time comparisons of consecutive random prices; return how many rose."""
        if num_ops < 2:
            raise ValueError("num_ops must be at least 2")
        out = self._stream
        print("\n=== Price Operations Benchmark ===", file=out)

        prices = [Price(self._price()) for _ in range(num_ops)]

        start = time.perf_counter_ns()
        count = sum(1 for prev, cur in zip(prices, prices[1:]) if cur > prev)
        duration = max(time.perf_counter_ns() - start, 1)

        comparisons = num_ops - 1
        print(f"Price comparisons: {comparisons}", file=out)
        print(f"Average latency: {duration / comparisons:g} ns per comparison", file=out)
        print(f"Greater count: {count}", file=out)
        return count


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the benchmarks and print their timings."""
    parser = argparse.ArgumentParser(prog="nanotrader-benchmark", description=__doc__)
    parser.add_argument(
        "--orders",
        type=int,
        nargs="+",
        default=list(DEFAULT_ORDER_COUNTS),
        help="order counts to benchmark",
    )
    parser.add_argument(
        "--price-ops", type=int, default=DEFAULT_PRICE_OPS, help="number of prices to compare"
    )
    parser.add_argument("--seed", type=int, default=42, help="random seed")
    args = parser.parse_args(argv)

    out = sys.stdout
    print("NanoTrader Performance Benchmarks", file=out)
    print("=================================", file=out)

    bench = SimpleBenchmark(args.seed, out)
    try:
        for count in args.orders:
            bench.benchmark_order_book(count)
        bench.benchmark_price_operations(args.price_ops)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("\nBenchmarks completed!", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())