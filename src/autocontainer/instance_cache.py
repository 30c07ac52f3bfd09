from __future__ import annotations

from collections import deque
from typing import Any

from autocontainer.forwarding import is_forwarder
from autocontainer.policies import CachePolicy
from autocontainer.tokens import Token

_MISS: Any = object()


class InstanceCache:
    """Hold the pooled instances of one scope, per token.

    Each pool is an ordered sequence with the most recently stored or handed
    out instance at the front. Once a pool is full, ``recycle`` moves the
    instance at the back to the front and returns it, so a pool of N hands
    out its N instances in rotation and a singleton pool always returns the
    one instance it holds.
    """

    def __init__(self) -> None:
        self._pools: dict[Token, deque[Any]] = {}

    def recycle(self, token: Token, policy: CachePolicy) -> Any:
        """Return a pooled instance when the pool is full, a miss marker otherwise."""
        pool = self._pools.get(token)
        if pool is None or len(pool) < policy.capacity:
            return _MISS
        pool.rotate(1)
        return pool[0]

    def store(self, token: Token, policy: CachePolicy, instance: Any) -> None:
        """Put ``instance`` at the front of the pool if there is room.

        Forwarders are never stored: they stand in for an instance that is
        still being built and will be stored by the outer ``make`` call.
        """
        if is_forwarder(instance):
            return
        pool = self._pools.setdefault(token, deque())
        if len(pool) < policy.capacity:
            pool.appendleft(instance)

    def count(self, token: Token) -> int:
        pool = self._pools.get(token)
        return 0 if pool is None else len(pool)

    @staticmethod
    def is_miss(value: Any) -> bool:
        return value is _MISS
