"""examples/multithreaded_usage.py - Tracing from several threads at once.

All threads trace into the same Tracer. The single flush at the end shows
every entry exactly once, in the order the threads recorded them, with the
messages aligned in one column.

Run:
    python examples/multithreaded_usage.py
"""

import threading
import time

from dabug import Tracer

tracer = Tracer(prefix="[orders] ")


def place_order(order_id: int, qty: int) -> None:
    """Simulate an order handler running in its own thread."""
    tracer.msg(f"order {order_id} received, qty={qty}")
    time.sleep(0.01)  # simulate DB latency
    tracer.objs(threading.current_thread().name, order_id)
    tracer.msg(f"order {order_id} placed")


if __name__ == "__main__":
    threads = [
        threading.Thread(target=place_order, args=(1000 + i, i + 1), name=f"worker-{i}")
        for i in range(3)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    print(f"{tracer.pending()} entries buffered")
    tracer.flush()
