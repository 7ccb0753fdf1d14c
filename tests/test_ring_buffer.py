import threading

import pytest

from nanotrader.ring_buffer import BufferFull, MPSCQueue, SPSCRingBuffer


def test_new_buffer_state():
    buffer = SPSCRingBuffer(8)
    assert buffer.empty()
    assert not buffer.full()
    assert len(buffer) == 0
    assert buffer.capacity() == 7


def test_fill_and_drain_in_fifo_order():
    buffer = SPSCRingBuffer(8)
    for i in range(7):
        assert buffer.try_push(i)

    assert buffer.full()
    assert not buffer.empty()
    assert len(buffer) == 7

    assert not buffer.try_push(999)

    for i in range(3):
        assert buffer.try_pop() == i

    assert len(buffer) == 4
    assert not buffer.full()

    for i in range(3, 7):
        assert buffer.try_pop() == i

    assert buffer.empty()
    assert buffer.try_pop() is None


def test_push_raises_when_full():
    buffer = SPSCRingBuffer(4)
    for i in range(3):
        buffer.push(i)
    with pytest.raises(BufferFull):
        buffer.push(3)


def test_wraps_around():
    buffer = SPSCRingBuffer(4)
    popped = []
    for i in range(20):
        assert buffer.try_push(i)
        popped.append(buffer.try_pop())
    assert popped == list(range(20))
    assert buffer.empty()


@pytest.mark.parametrize("size", [0, 3, 6, 10, -4])
def test_rejects_non_power_of_two(size):
    with pytest.raises(ValueError):
        SPSCRingBuffer(size)


def test_rejects_none_item():
    buffer = SPSCRingBuffer(4)
    with pytest.raises(ValueError):
        buffer.push(None)


def test_pop_batch_all():
    buffer = SPSCRingBuffer(8)
    for i in range(5):
        buffer.push(i)
    seen = []
    assert buffer.pop_batch(seen.append) == 5
    assert seen == [0, 1, 2, 3, 4]
    assert buffer.empty()


def test_pop_batch_limited():
    buffer = SPSCRingBuffer(8)
    for i in range(5):
        buffer.push(i)
    seen = []
    assert buffer.pop_batch(seen.append, 2) == 2
    assert seen == [0, 1]
    assert len(buffer) == 3
    assert buffer.try_pop() == 2


def test_pop_batch_empty():
    buffer = SPSCRingBuffer(8)
    seen = []
    assert buffer.pop_batch(seen.append) == 0
    assert seen == []


def test_mpsc_fifo():
    queue = MPSCQueue()
    assert queue.empty()
    for i in range(5):
        queue.push(i)
    assert not queue.empty()
    assert [queue.try_pop() for _ in range(5)] == [0, 1, 2, 3, 4]
    assert queue.try_pop() is None
    assert queue.empty()


def test_mpsc_many_producers():
    queue = MPSCQueue()

    def produce(base):
        for i in range(100):
            queue.push(base + i)

    threads = [threading.Thread(target=produce, args=(n * 1000,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    items = []
    while not queue.empty():
        items.append(queue.try_pop())
    assert sorted(items) == sorted(n * 1000 + i for n in range(4) for i in range(100))
    per_producer = [[x for x in items if x // 1000 == n] for n in range(4)]
    assert all(seq == sorted(seq) for seq in per_producer)


def test_mpsc_rejects_none():
    queue = MPSCQueue()
    with pytest.raises(ValueError):
        queue.push(None)