from gsmconsole.fifo import Queue


def test_empty_queue_returns_none():
    q = Queue()
    assert q.empty()
    assert q.peek() is None
    assert q.front() is None
    assert q.dequeue() is None
    assert len(q) == 0


def test_fifo_order():
    q = Queue()
    values = ["first", "second", "third"]
    for value in values:
        q.enqueue(value)
    assert [q.dequeue() for _ in values] == values
    assert q.empty()


def test_peek_does_not_remove():
    q = Queue()
    q.enqueue("a")
    q.enqueue("b")
    assert q.peek() == "a"
    assert q.front() == "a"
    assert q.size() == 2
    assert len(q) == 2


def test_size_tracks_operations():
    q = Queue()
    items = list(range(10))
    for item in items:
        q.enqueue(item)
    assert q.size() == len(items)
    q.dequeue()
    assert q.size() == len(items) - 1
    assert not q.empty()


def test_accepts_none_value():
    q = Queue()
    q.enqueue(None)
    assert q.size() == 1
    assert q.dequeue() is None
    assert q.empty()