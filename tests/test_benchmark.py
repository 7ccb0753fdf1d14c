import io

import pytest

from nanotrader.benchmark import SimpleBenchmark, main
from nanotrader.orders import OrderType, Price


def test_generate_order_ranges():
    bench = SimpleBenchmark(seed=1, out=io.StringIO())
    for order_id in range(1, 200):
        order = bench.generate_order(order_id, 9)
        assert order.id == order_id
        assert order.symbol == 9
        assert Price(99.0) <= order.price <= Price(101.0)
        assert 100 <= order.quantity <= 5000
        assert order.remaining_quantity == order.quantity
        assert order.type is OrderType.LIMIT


def test_generate_order_is_deterministic():
    a = SimpleBenchmark(seed=5, out=io.StringIO())
    b = SimpleBenchmark(seed=5, out=io.StringIO())
    first = [a.generate_order(i, 1) for i in range(1, 20)]
    second = [b.generate_order(i, 1) for i in range(1, 20)]
    assert [(o.price, o.quantity, o.side) for o in first] == [
        (o.price, o.quantity, o.side) for o in second
    ]


def test_benchmark_order_book_holds_every_order():
    out = io.StringIO()
    book = SimpleBenchmark(out=out).benchmark_order_book(50)
    assert len(book) == 50
    text = out.getvalue()
    assert "Orders to process: 50" in text
    assert "Total orders: 50" in text
    bids = book.bid_levels(3)
    assert len(bids) <= 3
    assert [p for p, _ in bids] == sorted((p for p, _ in bids), reverse=True)
    asks = book.ask_levels(3)
    assert [p for p, _ in asks] == sorted(p for p, _ in asks)


def test_benchmark_order_book_rejects_zero():
    with pytest.raises(ValueError):
        SimpleBenchmark(out=io.StringIO()).benchmark_order_book(0)


def test_price_operations_count_bounds():
    out = io.StringIO()
    count = SimpleBenchmark(out=out).benchmark_price_operations(1000)
    assert 0 <= count <= 999
    text = out.getvalue()
    assert "Price comparisons: 999" in text
    assert f"Greater count: {count}" in text


def test_price_operations_deterministic():
    a = SimpleBenchmark(seed=3, out=io.StringIO()).benchmark_price_operations(500)
    b = SimpleBenchmark(seed=3, out=io.StringIO()).benchmark_price_operations(500)
    assert a == b


def test_price_operations_rejects_too_few():
    with pytest.raises(ValueError):
        SimpleBenchmark(out=io.StringIO()).benchmark_price_operations(1)


def test_main_runs(capsys):
    assert main(["--orders", "10", "20", "--price-ops", "100"]) == 0
    text = capsys.readouterr().out
    assert text.count("=== Order Book Benchmark ===") == 2
    assert "Benchmarks completed!" in text


def test_main_reports_bad_count(capsys):
    assert main(["--orders", "0", "--price-ops", "100"]) == 1
    assert "Error" in capsys.readouterr().err