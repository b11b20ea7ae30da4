"""Tests for pass synchronization primitives."""
import threading

from liftoff_sim.sync import CompletionSignal, RepaintSignal


def test_completion_signal_releases_all_waiters():
    signal = CompletionSignal()
    woke = []

    def waiter():
        signal.wait()
        woke.append(True)

    threads = [threading.Thread(target=waiter) for _ in range(3)]
    for t in threads:
        t.start()
    assert not signal.released

    signal.release()
    for t in threads:
        t.join(timeout=5.0)
    assert len(woke) == 3


def test_completion_signal_release_is_idempotent():
    signal = CompletionSignal()
    signal.release()
    signal.release()
    assert signal.released
    # Already released: returns immediately
    signal.wait()


def test_repaint_keeps_latest_value():
    repaint = RepaintSignal()
    assert repaint.poll() is None
    for i in range(5):
        repaint.notify(i)
    assert repaint.poll() == 4
    assert repaint.poll() is None
