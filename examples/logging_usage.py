"""examples/logging_usage.py - Feed standard logging records into dabug.

Attaching a DabugHandler to a logger turns its records into dabug entries, so
they show up in the same aligned block as direct dabug calls. Records still
buffered at exit are flushed by ``logging.shutdown()``.

Run:
    python examples/logging_usage.py
"""

import logging

import dabug
from dabug import DabugHandler, FileSink

logger = logging.getLogger("payment_service")
logger.setLevel(logging.DEBUG)
logger.addHandler(DabugHandler())


def charge(user_id: int, amount: int) -> dict:
    dabug.here()
    logger.info("charging user_id=%d amount=%d", user_id, amount)
    receipt = {"status": "ok", "user_id": user_id, "charged": amount}
    dabug.objs(receipt)
    return receipt


if __name__ == "__main__":
    charge(1, 500)
    dabug.flush()

    # The same block, appended to a file instead of stdout
    dabug.set_writer(FileSink("/tmp/dabug_demo/trace.txt"))
    charge(2, 750)
    # No explicit flush: logging.shutdown() at exit flushes the handler.
