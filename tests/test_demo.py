import io

from nanotrader.demo import (
    SimpleMatchingEngine,
    main,
    run_book_demo,
    run_engine_demo,
    run_live_demo,
)
from nanotrader.orders import Price


def _depth_rows(text):
    lines = text.splitlines()
    start = lines.index("---------|--------   ---------|--------")
    return lines[start + 1:]


def test_submitted_ids_increase_and_orders_rest():
    engine = SimpleMatchingEngine(1)
    buy_id = engine.submit_buy_order(Price(100.00), 1000)
    sell_id = engine.submit_sell_order(Price(100.05), 500)
    assert sell_id == buy_id + 1
    assert len(engine.order_book) == 2
    assert engine.order_book.best_bid() == Price(100.00)
    assert engine.order_book.best_ask() == Price(100.05)


def test_crossing_prices_do_not_trade():
    engine = SimpleMatchingEngine(1)
    engine.submit_buy_order(Price(101.0), 10)
    engine.submit_sell_order(Price(99.0), 10)
    assert len(engine.order_book) == 2


def test_cancel_order():
    engine = SimpleMatchingEngine(1)
    order_id = engine.submit_buy_order(Price(99.5), 100)
    assert engine.cancel_order(order_id) is True
    assert engine.cancel_order(order_id) is False
    assert len(engine.order_book) == 0
    assert not engine.order_book.has_best_bid()


def test_market_data_empty_book():
    text = SimpleMatchingEngine(1).format_market_data()
    assert "BID: N/A | ASK: N/A" in text
    assert "Total Orders: 0" in text
    assert _depth_rows(text) == []


def test_market_data_one_sided():
    engine = SimpleMatchingEngine(1)
    engine.submit_sell_order(Price(100.05), 600)
    text = engine.format_market_data()
    assert "BID: N/A | ASK: $" in text
    assert "SPREAD" not in text


def test_market_data_two_sided_depth():
    engine = SimpleMatchingEngine(1)
    for price in (99.95, 99.90, 99.85):
        engine.submit_buy_order(Price(price), 500)
    engine.submit_sell_order(Price(100.05), 600)
    text = engine.format_market_data()
    assert "SPREAD: $" in text
    rows = _depth_rows(text)
    assert len(rows) == 3
    assert all(row.startswith("$") for row in rows)
    assert "$100.05" in rows[0]
    assert rows[0].startswith("$99.95")


def test_depth_limited_to_five_levels():
    engine = SimpleMatchingEngine(1)
    for step in range(8):
        engine.submit_buy_order(Price(99.0 + step * 0.1), 100)
    assert len(_depth_rows(engine.format_market_data())) == 5


def test_live_demo_is_deterministic_per_seed():
    first, second = io.StringIO(), io.StringIO()
    engine = run_live_demo(first, delay=0, seed=7)
    run_live_demo(second, delay=0, seed=7)
    assert first.getvalue() == second.getvalue()
    assert "--- Round 5 ---" in first.getvalue()
    assert len(engine.order_book) == 6 + 5 * 3


def test_engine_demo_matches_orders():
    out = io.StringIO()
    engine = run_engine_demo(out)
    text = out.getvalue()
    assert "Status: Matched" in text
    assert "Maker: 1 Taker: 3" in text
    assert engine.processed_orders() == 3
    assert engine.is_running() is False
    assert f"Available Order Capacity: {engine.available_order_capacity()}" in text


def test_book_demo_reports_levels():
    out = io.StringIO()
    book = run_book_demo(out)
    text = out.getvalue()
    assert "Buy order 1 added: Yes" in text
    assert "Sell order 1 added: Yes" in text
    assert len(book) == 3
    assert [p for p, _ in book.bid_levels(5)] == [Price(100.50), Price(100.40)]
    assert "Test completed successfully!" in text


def test_main_book_mode(capsys):
    assert main(["--mode", "book"]) == 0
    assert "Simple Order Book Test" in capsys.readouterr().out


def test_main_working_mode(capsys):
    assert main(["--delay", "0"]) == 0
    text = capsys.readouterr().out
    assert "PERFORMANCE TEST" in text
    assert "Final market state" in text