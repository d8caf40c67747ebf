import threading

from modelframe.pending import PendingFile


def test_take_once_then_empty():
    cell = PendingFile.initialize("model.STL")
    assert cell.is_pending
    assert cell.take() == "model.STL"
    assert cell.take() is None
    assert cell.take() is None
    assert not cell.is_pending


def test_take_on_empty_cell():
    cell = PendingFile.initialize(None)
    assert not cell.is_pending
    assert cell.take() is None
    assert cell.take() is None


def test_from_args():
    assert PendingFile.from_args(["readme.txt", "part.3mf"]).take() == "part.3mf"
    assert PendingFile.from_args(["readme.txt"]).take() is None


def test_concurrent_takers_receive_at_most_one_value():
    cell = PendingFile("model.stl")
    workers = 32
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        value = cell.take()
        with results_lock:
            results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == workers
    assert [r for r in results if r is not None] == ["model.stl"]


def test_unavailable_lock_reads_as_empty(caplog):
    cell = PendingFile("model.stl", lock_timeout=0.01)
    cell._lock.acquire()
    try:
        assert cell.take() is None
    finally:
        cell._lock.release()

    assert "lock unavailable" in caplog.text
    # the value was not lost, only withheld
    assert cell.take() == "model.stl"
