"""Tests for breaking synchronous dependency cycles with forwarders."""

from typing import Any

import pytest

from autocontainer.container import Container
from autocontainer.forwarding import is_forwarder
from autocontainer.policies import Pool, Singleton


class ServiceA:
    def __init__(self, b: Any) -> None:
        self.b = b

    def name(self) -> str:
        return "a"

    def whoami(self) -> Any:
        return self


class ServiceB:
    def __init__(self, a: Any) -> None:
        self.a = a

    def name(self) -> str:
        return "b"


def _register_cycle(container: Container, **kwargs: Any) -> None:
    container.provide("A", lambda scope, hint: ServiceA(scope.make("B")), **kwargs)
    container.provide("B", lambda scope, hint: ServiceB(scope.make("A")), **kwargs)


class TestCycleTermination:
    def test_two_node_cycle_terminates(self, container: Container) -> None:
        """make() on a cyclic pair returns without unbounded recursion."""
        _register_cycle(container)

        a = container.make("A")

        assert type(a) is ServiceA
        assert type(a.b) is ServiceB
        assert is_forwarder(a.b.a)

    def test_self_cycle_terminates(self, container: Container) -> None:
        """A provider depending on its own token gets a forwarder."""
        container.provide("Node", lambda scope, hint: {"self": scope.make("Node")})

        node = container.make("Node")

        assert is_forwarder(node["self"])

    def test_longer_cycle_terminates(self, container: Container) -> None:
        """Cycles through several tokens are broken at the repeated token."""
        container.provide("A", lambda scope, hint: ("A", scope.make("B")))
        container.provide("B", lambda scope, hint: ("B", scope.make("C")))
        container.provide("C", lambda scope, hint: ("C", scope.make("A")))

        a = container.make("A")

        assert a[0] == "A"
        assert a[1][0] == "B"
        assert a[1][1][0] == "C"
        assert is_forwarder(a[1][1][1])

    def test_cycle_detected_through_child_scope(self, container: Container) -> None:
        """Cycles are caught when the providers live in an ancestor scope."""
        _register_cycle(container)
        child = container.inner()

        a = child.make("A")

        assert type(a) is ServiceA
        assert is_forwarder(a.b.a)


class TestForwarderBehaviour:
    def test_singleton_forwarder_forwards_to_cached_instance(self, container: Container) -> None:
        """Under a singleton policy the forwarder realizes to the stored instance."""
        _register_cycle(container, policy=Singleton())

        a = container.make("A")
        forwarded = a.b.a

        assert forwarded.name() == "a"
        assert forwarded.b is a.b
        assert forwarded == a
        assert isinstance(forwarded, ServiceA)
        assert container.make("B") is a.b

    def test_method_sees_real_instance_as_self(self, container: Container) -> None:
        """Methods called through the forwarder are bound to the real instance."""
        _register_cycle(container, policy=Singleton())

        a = container.make("A")
        forwarded = a.b.a

        assert forwarded.whoami() is a
        assert not is_forwarder(forwarded.whoami())

    def test_transient_forwarder_builds_fresh_instance(self, container: Container) -> None:
        """Without a policy the deferred make() builds a new instance."""
        _register_cycle(container)

        a = container.make("A")
        forwarded = a.b.a

        assert forwarded.name() == "a"
        assert forwarded == forwarded
        assert not (forwarded == a)
        assert type(forwarded.b) is ServiceB

    def test_forwarder_realized_once(self, container: Container) -> None:
        """The deferred make() runs once, later operations reuse its result."""
        calls: list[int] = []

        def provide_a(scope: Container, hint: Any) -> ServiceA:
            calls.append(1)
            return ServiceA(scope.make("B"))

        container.provide("A", provide_a)
        container.provide("B", lambda scope, hint: ServiceB(scope.make("A")))

        a = container.make("A")
        forwarded = a.b.a
        assert len(calls) == 1

        forwarded.name()
        forwarded.name()
        _ = forwarded.b

        assert len(calls) == 2

    def test_attribute_writes_reach_real_instance(self, container: Container) -> None:
        """Setting and deleting attributes through the forwarder mutates the real instance."""
        _register_cycle(container, policy=Singleton())

        a = container.make("A")
        forwarded = a.b.a
        forwarded.label = "primary"

        assert a.label == "primary"

        del forwarded.label

        assert not hasattr(a, "label")

    def test_forwarders_are_not_pooled(self, container: Container) -> None:
        """A forwarder returned for a cycle never enters the pool."""
        _register_cycle(container, policy=Pool(2))

        a = container.make("A")

        assert container.cached_count("A") == 1
        assert container.cached_count("B") == 1
        assert is_forwarder(a.b.a)
        assert not is_forwarder(container.make("A"))

    def test_stack_cleared_after_cycle(self, container: Container) -> None:
        """After a cyclic resolution a new make() resolves normally."""
        _register_cycle(container)

        container.make("A")
        b = container.make("B")

        assert type(b) is ServiceB
        assert type(b.a) is ServiceA
        assert is_forwarder(b.a.b)


class TestCycleFailures:
    def test_failure_inside_cycle_unwinds_stack(self, container: Container) -> None:
        """A provider failing mid-cycle leaves no in-flight tokens behind."""
        state = {"fail": True}

        def provide_b(scope: Container, hint: Any) -> ServiceB:
            a = scope.make("A")
            if state["fail"]:
                raise RuntimeError("b failed")
            return ServiceB(a)

        container.provide("A", lambda scope, hint: ServiceA(scope.make("B")))
        container.provide("B", provide_b)

        with pytest.raises(RuntimeError, match="b failed"):
            container.make("A")

        state["fail"] = False
        a = container.make("A")

        assert type(a) is ServiceA
        assert type(a.b) is ServiceB
