"""Demonstration programs driving the order book and the matching engine."""

from __future__ import annotations

import argparse
import random
import sys
import time
from typing import List, Optional, Sequence, TextIO

from nanotrader.matching_engine import MatchingEngine, OrderRequest, RequestType
from nanotrader.order_book import OrderBook
from nanotrader.orders import Order, OrderType, Price, Side, now

DEPTH = 5


def _stream(out: Optional[TextIO]) -> TextIO:
    return out if out is not None else sys.stdout


class SimpleMatchingEngine:
    """A single-symbol book that rests limit orders without crossing them."""

    def __init__(self, symbol: int) -> None:
        self._book = OrderBook(symbol)
        self._orders: List[Order] = []
        self._next_order_id = 1

    def _submit(self, side: Side, price: Price, quantity: int) -> int:
        order = Order(
            self._next_order_id,
            self._book.symbol,
            price,
            quantity,
            side,
            OrderType.LIMIT,
            now(),
        )
        self._next_order_id += 1
        if not self._book.add_order(order):
            raise ValueError(f"order {order.id} could not be added to the book")
        self._orders.append(order)
        return order.id

    def submit_buy_order(self, price: Price, quantity: int) -> int:
        """Rest a limit buy order and return its id."""
        return self._submit(Side.BUY, price, quantity)

    def submit_sell_order(self, price: Price, quantity: int) -> int:
        """Rest a limit sell order and return its id."""
        return self._submit(Side.SELL, price, quantity)

    def cancel_order(self, order_id: int) -> bool:
        """Remove an order from the book; False if it is not there."""
        return self._book.remove_order(order_id)

    @property
    def order_book(self) -> OrderBook:
        return self._book

    def format_market_data(self) -> str:
        """Render the top of book and the depth table as text."""
        book = self._book
        bid, ask = book.best_bid(), book.best_ask()
        lines = ["", "📊 MARKET DATA:", "================"]

        if bid is not None and ask is not None:
            spread = ask.to_float() - bid.to_float()
            lines.append(
                f"BID: ${bid.to_float():g} | ASK: ${ask.to_float():g}"
                f" | SPREAD: ${spread:g}"
            )
        else:
            bid_text = f"${bid.to_float():g}" if bid is not None else "N/A"
            ask_text = f"${ask.to_float():g}" if ask is not None else "N/A"
            lines.append(f"BID: {bid_text} | ASK: {ask_text}")

        lines.append(f"Total Orders: {len(book)}")

        bids = book.bid_levels(DEPTH)
        asks = book.ask_levels(DEPTH)
        lines += [
            "",
            "📈 ORDER BOOK DEPTH:",
            "BIDS                 ASKS",
            "Price    | Qty       Price    | Qty",
            "---------|--------   ---------|--------",
        ]
        for row in range(max(len(bids), len(asks))):
            if row < len(bids):
                price, qty = bids[row]
                left = f"${price.to_float():<7.2f} | {qty:<7}"
            else:
                left = f"{'':<8} | {'':<7}"
            right = ""
            if row < len(asks):
                price, qty = asks[row]
                right = f"${price.to_float():<7.2f} | {qty:<7}"
            lines.append(f"{left}   {right}")
        return "\n".join(lines)


def run_live_demo(
    out: Optional[TextIO] = None, delay: float = 0.5, seed: int = 42
) -> SimpleMatchingEngine:
    """Seed a book with market makers, then add random orders over five rounds."""
    stream = _stream(out)
    print("\n🚀 LIVE TRADING SIMULATION", file=stream)
    print("==========================", file=stream)

    engine = SimpleMatchingEngine(1)
    rng = random.Random(seed)

    print("Adding initial market makers...", file=stream)
    engine.submit_buy_order(Price(99.95), 500)
    engine.submit_buy_order(Price(99.90), 1000)
    engine.submit_buy_order(Price(99.85), 750)
    engine.submit_sell_order(Price(100.05), 600)
    engine.submit_sell_order(Price(100.10), 800)
    engine.submit_sell_order(Price(100.15), 400)

    print(engine.format_market_data(), file=stream)
    print("\n⚡ Starting live trading...", file=stream)

    for round_number in range(1, 6):
        print(f"\n--- Round {round_number} ---", file=stream)
        for _ in range(3):
            price = rng.uniform(99.5, 100.5)
            qty = rng.randint(100, 1000)
            if rng.randint(0, 1) == 0:
                order_id = engine.submit_buy_order(Price(price), qty)
                print(f"✅ BUY order {order_id}: {qty} @ ${price:g}", file=stream)
            else:
                order_id = engine.submit_sell_order(Price(price), qty)
                print(f"✅ SELL order {order_id}: {qty} @ ${price:g}", file=stream)

        print(engine.format_market_data(), file=stream)
        if delay > 0:
            time.sleep(delay)

    print("\n🎯 Final market state:", file=stream)
    print(engine.format_market_data(), file=stream)
    return engine


def run_engine_demo(out: Optional[TextIO] = None) -> MatchingEngine:
    """Submit three orders through the queued engine and report the results."""
    stream = _stream(out)
    print("MatchX | NanoTrader - Ultra-Fast Order Matching Engine", file=stream)
    print("===========================================\n", file=stream)

    engine = MatchingEngine()
    engine.start()
    print("Engine started successfully", file=stream)
    print("Running basic functionality test...", file=stream)

    symbol = 1
    submissions = [
        ("Buy order submitted", Side.BUY, 100.50, 1000),
        ("Sell order submitted", Side.SELL, 100.60, 500),
        ("Matching sell order submitted", Side.SELL, 100.40, 800),
    ]
    for order_id, (label, side, price, qty) in enumerate(submissions, start=1):
        order = Order(order_id, symbol, Price(price), qty, side, OrderType.LIMIT, now())
        if engine.submit_order(OrderRequest(RequestType.ADD, order)):
            print(
                f"✓ {label}: {order.id} @ ${order.price.to_float():g}"
                f" qty={order.quantity}",
                file=stream,
            )

    engine.process_orders()

    for result in engine.results():
        print(
            f"\nOrder {result.order_id} - Status: {result.status.value.capitalize()}",
            file=stream,
        )
        if result.trades:
            print(f"  Trades generated: {len(result.trades)}", file=stream)
            for trade in result.trades:
                print(
                    f"    Maker: {trade.maker_order_id} Taker: {trade.taker_order_id}"
                    f" Price: ${trade.price.to_float():g} Qty: {trade.quantity}",
                    file=stream,
                )

    book = engine.get_order_book(symbol)
    if book is not None:
        bid, ask = book.best_bid(), book.best_ask()
        print("\nOrder Book State:", file=stream)
        print(f"Best Bid: {f'${bid.to_float():g}' if bid is not None else 'None'}", file=stream)
        print(f"Best Ask: {f'${ask.to_float():g}' if ask is not None else 'None'}", file=stream)
        print(f"Total Orders: {len(book)}", file=stream)

    print(f"\nTotal Processed Orders: {engine.processed_orders()}", file=stream)
    print(f"Available Order Capacity: {engine.available_order_capacity()}", file=stream)

    engine.stop()
    print("\nNanoTrader demo completed successfully!", file=stream)
    return engine


def run_book_demo(out: Optional[TextIO] = None) -> OrderBook:
    """Rest three orders in a bare order book and print its levels."""
    stream = _stream(out)
    print("NanoTrader - Simple Order Book Test", file=stream)
    print("===================================\n", file=stream)

    symbol = 1
    book = OrderBook(symbol)
    print(f"Order book created for symbol {symbol}", file=stream)

    orders = [
        ("Buy order 1", Order(1, symbol, Price(100.50), 1000, Side.BUY, OrderType.LIMIT, now())),
        ("Buy order 2", Order(2, symbol, Price(100.40), 500, Side.BUY, OrderType.LIMIT, now())),
        ("Sell order 1", Order(3, symbol, Price(100.60), 800, Side.SELL, OrderType.LIMIT, now())),
    ]
    added = [(label, book.add_order(order)) for label, order in orders]
    for label, ok in added:
        print(f"{label} added: {'Yes' if ok else 'No'}", file=stream)

    bid, ask = book.best_bid(), book.best_ask()
    if bid is not None:
        print(f"Best bid: ${bid.to_float():g}", file=stream)
    if ask is not None:
        print(f"Best ask: ${ask.to_float():g}", file=stream)
    print(f"Total orders: {len(book)}", file=stream)

    print("\nBid levels:", file=stream)
    for price, qty in book.bid_levels(DEPTH):
        print(f"  ${price.to_float():g} - {qty} shares", file=stream)
    print("\nAsk levels:", file=stream)
    for price, qty in book.ask_levels(DEPTH):
        print(f"  ${price.to_float():g} - {qty} shares", file=stream)

    print("\nTest completed successfully!", file=stream)
    return book


def _run_working_demo(out: TextIO, delay: float, seed: int) -> None:
    print("MatchX | NanoTrader - Ultra-Fast Order Matching Engine", file=out)
    print("================================================", file=out)
    print("Production-grade HFT matching engine\n", file=out)

    print("🧪 BASIC FUNCTIONALITY TEST", file=out)
    print("============================", file=out)
    engine = SimpleMatchingEngine(1)
    buy_id = engine.submit_buy_order(Price(100.00), 1000)
    sell_id = engine.submit_sell_order(Price(100.05), 500)
    print(f"✅ Buy order submitted: ID {buy_id}", file=out)
    print(f"✅ Sell order submitted: ID {sell_id}", file=out)
    print(engine.format_market_data(), file=out)

    print("\n⚡ PERFORMANCE TEST", file=out)
    print("==================", file=out)
    count = 10_000
    start = time.perf_counter_ns()
    for i in range(count):
        engine.submit_buy_order(Price(99.50 + (i % 100) * 0.01), 100)
    elapsed_us = max((time.perf_counter_ns() - start) // 1000, 1)
    print(f"✅ Processed 10,000 orders in {elapsed_us} μs", file=out)
    print(f"✅ Average latency: {elapsed_us / count:g} μs per order", file=out)
    print(f"✅ Throughput: {count * 1_000_000 / elapsed_us:g} orders/sec", file=out)

    run_live_demo(out, delay, seed)

    print("\n🎉 NanoTrader demo completed successfully!", file=out)
    print("Ready for production deployment! 🚀\n", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the demonstrations; return the process exit status."""
    parser = argparse.ArgumentParser(prog="nanotrader", description=__doc__)
    parser.add_argument(
        "--mode",
        choices=("working", "engine", "book"),
        default="working",
        help="which demonstration to run",
    )
    parser.add_argument("--delay", type=float, default=0.5, help="seconds between rounds")
    parser.add_argument("--seed", type=int, default=42, help="random seed for the live demo")
    args = parser.parse_args(argv)

    try:
        if args.mode == "engine":
            run_engine_demo(sys.stdout)
        elif args.mode == "book":
            run_book_demo(sys.stdout)
        else:
            _run_working_demo(sys.stdout, args.delay, args.seed)
    except Exception as exc:  # report any failure and exit non-zero
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())