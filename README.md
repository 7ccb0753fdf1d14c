# nanotrader

An in-memory limit order book and matching engine that uses price-time
priority. It also has a bounded ring buffer, an unbounded queue and a
fixed-capacity object pool, which the engine uses.

## Modules

- `nanotrader.orders`: `Price` is a fixed-point price kept to six decimal
  places. Use `Price(100.5)` or `Price.from_raw(100_500_000)` to make one,
  and `raw_value()` or `to_float()` to read it back. This module also holds
  the `Side` enum (`BUY`, `SELL`), the `OrderType` enum (`LIMIT`, `MARKET`,
  `IOC`, `FOK`), the `Order` dataclass and the frozen `Trade` dataclass.
  `now()` gives a timestamp in nanoseconds.
  `Order.fill(quantity)` lowers `remaining_quantity`. It raises `ValueError`
  if the fill is negative or larger than what remains.
- `nanotrader.order_book`: `OrderBook` holds the orders for one symbol.
  `PriceLevel` keeps the orders at a single price in arrival order, and its
  `head` property is the oldest of them. Through the book you can:
  - add and remove orders with `add_order` and `remove_order`,
  - look orders up with `get_order`,
  - read the best prices with `best_bid()` and `best_ask()`, which return
    `None` when that side is empty,
  - get depth snapshots with `bid_levels(depth)` and `ask_levels(depth)`.
    These return `(Price, quantity)` pairs with the best price first.
  - call `len(book)` to count the resting orders.
- `nanotrader.matching_engine`: `MatchingEngine` takes `OrderRequest`s of
  type `RequestType.ADD`, `CANCEL` or `MODIFY` and places them in a queue.
  `process_orders()` then matches them. It produces one `MatchResult` per
  request, with a `MatchStatus` (`ADDED`, `MATCHED`, `CANCELLED`,
  `MODIFIED`, `REJECTED`) and the trades the request caused.
  - Trades execute at the price of the resting order.
  - A market order sweeps the opposite side.
  - An IOC order never rests in the book.
  - A FOK order that cannot be filled completely is rejected and its trades
    are dropped from the result.
  - A modify with `new_quantity=0` cancels the order.
  - The engine rests a copy of each added order, so the `Order` you submit
    is never changed.
- `nanotrader.ring_buffer`:
  - `SPSCRingBuffer(size)` is a bounded FIFO whose size must be a power of
    two, and it holds at most `size - 1` items. `push` raises `BufferFull`
    when it is full, and `try_push` returns `False` instead. `try_pop`
    returns `None` when it is empty. `pop_batch(func, max_items)` passes
    items to a callback.
  - `MPSCQueue` is an unbounded FIFO protected by a lock.
  - Neither of them accepts `None` as an item.
- `nanotrader.pool`: `PoolAllocator(factory, pool_size)` lets at most
  `pool_size` objects be live at once. `construct` raises `MemoryError`
  when the pool is exhausted, and `destroy` gives an object back to the pool.
- `nanotrader.demo` and `nanotrader.benchmark`: the command-line tools
  described below. `demo.SimpleMatchingEngine` is a single-symbol book that
  rests limit orders without crossing them.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install .[test]
pytest
```

## Using the order book

```python
from nanotrader.orders import Order, OrderType, Price, Side, now
from nanotrader.order_book import OrderBook

book = OrderBook(1)
book.add_order(Order(1, 1, Price(100.50), 1000, Side.BUY, OrderType.LIMIT, now()))
book.add_order(Order(2, 1, Price(100.60), 500, Side.SELL, OrderType.LIMIT, now()))

print(book.best_bid().to_float(), book.best_ask().to_float())  # 100.5 100.6
print(book.bid_levels(5))  # [(Price(100.5), 1000)]
```

## Using the matching engine

```python
from nanotrader.matching_engine import MatchingEngine, OrderRequest, RequestType
from nanotrader.orders import Order, OrderType, Price, Side, now

engine = MatchingEngine()
engine.submit_order(OrderRequest(RequestType.ADD,
    Order(1, 1, Price(100.50), 1000, Side.BUY, OrderType.LIMIT, now())))
engine.submit_order(OrderRequest(RequestType.ADD,
    Order(2, 1, Price(100.40), 800, Side.SELL, OrderType.LIMIT, now())))
engine.process_orders()

for result in engine.results():
    print(result.order_id, result.status, result.trades)
```

The second order trades 800 at 100.50 against the first. After that,
200 of the first order is still resting in the book.

Use `get_result()` to take the results one at a time. Other methods report
on the engine: `processed_orders()`, `get_order_book(symbol)`,
`order_book_count()`, `total_orders()` and `available_order_capacity()`.
`clear_all_books()` empties the engine. The input and output queues each
hold up to 65,535 entries, and `submit_order` returns `False` when the
input queue is full.

## Command-line tools

```
nanotrader [--mode {working,engine,book}] [--delay SECONDS] [--seed N]
```

This runs a demonstration and exits with status 0, or with 1 on error.
There are three modes:

- `working` is the default. It rests a few orders and prints the market data
  and depth table. It then times 10,000 insertions, and runs a five-round
  simulated session of random orders with `--delay` seconds between rounds
  (0.5 by default). The random orders are drawn from `--seed`, which is 42
  by default.
- `engine` sends three orders through `MatchingEngine` and prints the
  results and trades.
- `book` rests three orders in a bare `OrderBook` and prints its levels.

```
nanotrader-bench [--orders N [N ...]] [--price-ops N] [--seed N]
```

This times how long it takes to add random orders to a book, for each count
given to `--orders` (by default 1000, 10000 and 100000). It also times
comparisons between `--price-ops` consecutive random prices, 10,000,000 by
default. In Python that takes a long time, so pass a smaller number for a
quick run.

## What it does not do

The engine runs only inside the calling process. It has no network
interface or server, no market-data feed, and no storage: every book is
lost when the process ends. `start()` and `stop()` only set the flag that
`is_running()` reports. Nothing processes requests in the background, so
call `process_orders()` yourself.