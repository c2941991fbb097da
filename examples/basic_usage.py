"""examples/basic_usage.py - dabug execution tracing demo.

Demonstrates the two modes:
    Scenario A — buffered (default): calls accumulate, flush() prints one block
    Scenario B — autoflush: every call prints its own line immediately

Run:
    python examples/basic_usage.py
"""

import dataclasses

import dabug


@dataclasses.dataclass
class Order:
    order_id: int
    items: list


def load_order(order_id: int) -> Order:
    dabug.here()
    return Order(order_id, ["apple", "pear"])


def price(order: Order) -> int:
    total = 0
    for item in order.items:
        total += len(item) * 10
    dabug.objs(order, total)
    return total


# ===========================================================================
# Scenario A: buffered
# ===========================================================================


def scenario_a() -> None:
    dabug.msg("A")
    order = load_order(7)
    dabug.msg("B")
    price(order)
    dabug.msg("wat")
    dabug.flush()


# ===========================================================================
# Scenario B: autoflush
# ===========================================================================


def scenario_b() -> None:
    dabug.set_prefix("[auto] ")
    dabug.set_autoflush(True)
    order = load_order(8)
    price(order)
    dabug.set_autoflush(False)
    dabug.set_prefix("")


if __name__ == "__main__":
    print("Scenario A: buffered, one block on flush()")
    scenario_a()
    print()
    print("Scenario B: autoflush, one line per call")
    scenario_b()
