"""Aliases: bind abstract tokens to concrete ones.

``bind`` redirects one token to another and can attach a class hint to the
concrete token. Cache policies are looked up for the exact token passed to
``make`` before the alias is followed, so an abstract token can be cached
independently of its concrete target.
"""

from __future__ import annotations

from autocontainer import Container, Singleton, class_provider


class Clock:
    def now(self) -> str:
        raise NotImplementedError


class FixedClock(Clock):
    def now(self) -> str:
        return "2024-01-01T00:00:00"


def main() -> None:
    container = Container.create()
    container.provide("FixedClock", class_provider())
    container.bind("Clock", "FixedClock", FixedClock, policy=Singleton())

    clock = container.make("Clock")
    print(f"now={clock.now()}")  # => now=2024-01-01T00:00:00
    print(f"concrete_type={type(clock).__name__}")  # => concrete_type=FixedClock

    abstract_cached = container.make("Clock") is container.make("Clock")
    concrete_cached = container.make("FixedClock") is container.make("FixedClock")
    print(f"abstract_cached={abstract_cached}")  # => abstract_cached=True
    print(f"concrete_cached={concrete_cached}")  # => concrete_cached=False


if __name__ == "__main__":
    main()
