"""Cycles: mutually dependent services resolve through a forwarder.

When a provider asks for a token that is still being built, it receives a
forwarder. The forwarder resolves the token on first use and then behaves
like the real instance.
"""

from __future__ import annotations

from typing import Any

from autocontainer import Container, Singleton, is_forwarder


class Orders:
    def __init__(self, customers: Any) -> None:
        self.customers = customers

    def describe(self) -> str:
        return "orders"


class Customers:
    def __init__(self, orders: Any) -> None:
        self.orders = orders

    def describe(self) -> str:
        return "customers"


def main() -> None:
    container = Container.create()
    container.provide(
        "Orders",
        lambda scope, hint: Orders(scope.make("Customers")),
        policy=Singleton(),
    )
    container.provide(
        "Customers",
        lambda scope, hint: Customers(scope.make("Orders")),
        policy=Singleton(),
    )

    orders = container.make("Orders")
    back_reference = orders.customers.orders

    print(f"placeholder={is_forwarder(back_reference)}")  # => placeholder=True
    print(f"forwards={back_reference.describe()}")  # => forwards=orders
    print(f"same_state={back_reference.customers is orders.customers}")  # => same_state=True
    print(f"isinstance={isinstance(back_reference, Orders)}")  # => isinstance=True


if __name__ == "__main__":
    main()
