"""Tests for thread safety of Container."""

import threading
import time
from typing import Any

from autocontainer.container import Container
from autocontainer.forwarding import is_forwarder
from autocontainer.policies import Pool, Singleton


class Slow:
    def __init__(self) -> None:
        # Widen the window in which unsynchronised scopes would race.
        time.sleep(0.001)


def _make_concurrently(
    container: Container,
    token: str,
    count: int,
) -> tuple[list[Any], list[Exception]]:
    results: list[Any] = []
    errors: list[Exception] = []

    def resolve() -> None:
        try:
            results.append(container.make(token))
        except Exception as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=resolve) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results, errors


class TestConcurrentResolution:
    def test_concurrent_singleton_resolution_same_instance(self, container: Container) -> None:
        """Concurrent singleton resolution returns the same instance."""
        container.provide("Slow", lambda scope, hint: Slow(), policy=Singleton())

        results, errors = _make_concurrently(container, "Slow", 10)

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)

    def test_concurrent_pool_produces_exactly_capacity_instances(
        self,
        container: Container,
    ) -> None:
        """A pool of three never builds more than three instances."""
        container.provide("Slow", lambda scope, hint: Slow(), policy=Pool(3))

        results, errors = _make_concurrently(container, "Slow", 20)

        assert not errors
        assert len(results) == 20
        assert len({id(r) for r in results}) == 3

    def test_concurrent_transient_resolution_different_instances(
        self,
        container: Container,
    ) -> None:
        """Concurrent transient resolution creates different instances."""
        container.provide("Slow", lambda scope, hint: Slow())

        results, errors = _make_concurrently(container, "Slow", 10)

        assert not errors
        assert len({id(r) for r in results}) == 10

    def test_concurrent_children_delegate_safely(self, container: Container) -> None:
        """Children resolving through a shared parent do not corrupt its stack."""
        container.provide("Slow", lambda scope, hint: Slow())
        children = [container.inner().bind("Slow", "Slow", policy=Singleton()) for _ in range(5)]
        results: list[Any] = []
        errors: list[Exception] = []

        def resolve(child: Container) -> None:
            try:
                results.append((child, child.make("Slow")))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve, args=(child,)) for child in children]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert all(type(instance) is Slow for _, instance in results)
        assert all(child.make("Slow") is instance for child, instance in results)


class Node:
    def __init__(self, name: str, peer: Any) -> None:
        self.name = name
        self.peer = peer

    def itself(self) -> Any:
        return self


def _unrealized_forwarder(container: Container) -> Any:
    """Return the forwarder a transient A <-> B cycle leaves inside B."""
    container.provide("A", lambda scope, hint: Node("a", scope.make("B")))
    container.provide("B", lambda scope, hint: Node("b", scope.make("A")))
    forwarder = container.make("A").peer.peer
    assert is_forwarder(forwarder)
    return forwarder


class TestForwarderRealization:
    def test_realizing_while_provider_runs_does_not_deadlock(
        self,
        container: Container,
    ) -> None:
        """A forwarder realized during another thread's make() never deadlocks."""
        forwarder = _unrealized_forwarder(container)
        in_provider = threading.Event()
        names: list[str] = []

        def slow_provider(scope: Container, hint: object) -> str:
            in_provider.set()
            time.sleep(0.2)
            return forwarder.name

        container.provide("X", slow_provider)

        def resolve() -> None:
            names.append(container.make("X"))

        def touch() -> None:
            in_provider.wait()
            names.append(forwarder.name)

        threads = [
            threading.Thread(target=resolve, daemon=True),
            threading.Thread(target=touch, daemon=True),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not any(t.is_alive() for t in threads)
        assert names == ["a", "a"]

    def test_concurrent_realization_builds_once(self, container: Container) -> None:
        """Threads realizing one forwarder get the same instance, built once."""
        forwarder = _unrealized_forwarder(container)
        builds: list[Node] = []

        def build(scope: Container, hint: object) -> Node:
            builds.append(Node("a", None))
            return builds[-1]

        container.provide("A", build)
        started = threading.Barrier(8)
        seen: list[Any] = []

        def touch() -> None:
            started.wait()
            seen.append(forwarder.itself())

        threads = [threading.Thread(target=touch) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert len(builds) == 1
        assert len(seen) == 8
        assert all(node is builds[0] for node in seen)
