"""Cache policies: fresh instances, singletons and rotating pools.

A token without a policy gets a new instance on every ``make`` call.
``Singleton()`` keeps one instance per scope. ``Pool(n)`` keeps up to ``n``
instances and then hands them out in rotation.
"""

from __future__ import annotations

import itertools

from autocontainer import Container, Pool, Singleton


class Connection:
    def __init__(self, number: int) -> None:
        self.number = number


def main() -> None:
    counter = itertools.count(1)
    container = Container.create()

    container.provide("transient", lambda scope, hint: Connection(next(counter)))
    first = container.make("transient")
    second = container.make("transient")
    print(f"transient_same={first is second}")  # => transient_same=False

    container.provide("singleton", lambda scope, hint: object(), policy=Singleton())
    singleton_same = container.make("singleton") is container.make("singleton")
    print(f"singleton_same={singleton_same}")  # => singleton_same=True

    pool_counter = itertools.count(1)
    container.provide(
        "pooled",
        lambda scope, hint: Connection(next(pool_counter)),
        policy=Pool(2),
    )
    numbers = [container.make("pooled").number for _ in range(5)]
    print(f"pool_sequence={numbers}")  # => pool_sequence=[1, 2, 1, 2, 1]


if __name__ == "__main__":
    main()
