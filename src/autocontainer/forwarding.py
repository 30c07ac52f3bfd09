"""Deferred stand-ins used to break synchronous dependency cycles.

When a provider transitively asks for a token that is still being built, the
container hands back a ``Forwarder`` instead of recursing. The forwarder holds
a deferred ``make`` call and runs it the first time anything is done with it:
reading, writing or deleting an attribute, calling it, asking for its class,
iterating it, comparing it, and so on. Every later operation goes straight to
the real instance.

Limitations:
    Realization is synchronous. If a constructor dereferences the forwarder it
    was handed before the cycle has finished unwinding, the deferred ``make``
    runs while the original resolution is still in flight, detects the same
    cycle again and produces another forwarder. That is an application-level
    misuse of a circular dependency and is not detected separately.

    Identity checks (``forwarder is instance``) and ``type(forwarder)`` are the
    two operations Python does not let an object intercept. Use ``==`` or
    ``isinstance`` instead.

    Operators beyond the ones listed on ``Forwarder`` (bitwise, matrix, floor
    division, power and so on) are not forwarded and raise ``TypeError``.

"""

from __future__ import annotations

import logging
import operator
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager
from types import TracebackType
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

_UNREALIZED: Any = object()


def _realize(forwarder: Forwarder) -> Any:
    # Realization takes the lock of the scope that handed out the forwarder,
    # the same lock its deferred make takes, so there is one lock order.
    target = object.__getattribute__(forwarder, "_target")
    if target is not _UNREALIZED:
        return target
    with object.__getattribute__(forwarder, "_lock"):
        target = object.__getattribute__(forwarder, "_target")
        if target is _UNREALIZED:
            action = object.__getattribute__(forwarder, "_action")
            logger.debug("Realizing forwarder via %r", action)
            target = action()
            object.__setattr__(forwarder, "_target", target)
            object.__setattr__(forwarder, "_action", None)
    return target


def _forward(operation: Callable[..., Any], name: str) -> Callable[..., Any]:
    def method(self: Forwarder, *args: Any) -> Any:
        return operation(_realize(self), *args)

    method.__name__ = name
    method.__qualname__ = f"Forwarder.{name}"
    return method


class Forwarder:
    """Transparent placeholder for the eventual result of a deferred call.

    Attribute access goes through ``__getattribute__``, so methods and
    properties are always looked up on the real instance and bound to it.
    A method called through the forwarder therefore sees the real instance as
    ``self``, never the forwarder.

    Special methods are looked up on the type by Python, so the ones objects
    commonly rely on are forwarded explicitly below.
    """

    __slots__ = ("__weakref__", "_action", "_lock", "_target")

    def __init__(
        self,
        action: Callable[[], Any],
        lock: AbstractContextManager[Any] | None = None,
    ) -> None:
        object.__setattr__(self, "_action", action)
        object.__setattr__(self, "_target", _UNREALIZED)
        object.__setattr__(self, "_lock", threading.RLock() if lock is None else lock)

    def __getattribute__(self, name: str) -> Any:
        return getattr(_realize(self), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(_realize(self), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(_realize(self), name)

    def __dir__(self) -> list[str]:
        return dir(_realize(self))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _realize(self)(*args, **kwargs)

    def __enter__(self) -> Any:
        return _realize(self).__enter__()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Any:
        return _realize(self).__exit__(exc_type, exc_value, traceback)

    __repr__ = _forward(repr, "__repr__")
    __str__ = _forward(str, "__str__")
    __bool__ = _forward(bool, "__bool__")
    __hash__ = _forward(hash, "__hash__")  # type: ignore[assignment]

    __len__ = _forward(len, "__len__")
    __iter__ = _forward(iter, "__iter__")
    __next__ = _forward(next, "__next__")
    __contains__ = _forward(operator.contains, "__contains__")
    __getitem__ = _forward(operator.getitem, "__getitem__")
    __setitem__ = _forward(operator.setitem, "__setitem__")
    __delitem__ = _forward(operator.delitem, "__delitem__")

    __eq__ = _forward(operator.eq, "__eq__")  # type: ignore[assignment]
    __ne__ = _forward(operator.ne, "__ne__")  # type: ignore[assignment]
    __lt__ = _forward(operator.lt, "__lt__")
    __le__ = _forward(operator.le, "__le__")
    __gt__ = _forward(operator.gt, "__gt__")
    __ge__ = _forward(operator.ge, "__ge__")

    __add__ = _forward(operator.add, "__add__")
    __sub__ = _forward(operator.sub, "__sub__")
    __mul__ = _forward(operator.mul, "__mul__")
    __truediv__ = _forward(operator.truediv, "__truediv__")

    __radd__ = _forward(lambda target, other: other + target, "__radd__")
    __rsub__ = _forward(lambda target, other: other - target, "__rsub__")
    __rmul__ = _forward(lambda target, other: other * target, "__rmul__")
    __rtruediv__ = _forward(lambda target, other: other / target, "__rtruediv__")

    __iadd__ = _forward(operator.iadd, "__iadd__")
    __isub__ = _forward(operator.isub, "__isub__")
    __imul__ = _forward(operator.imul, "__imul__")
    __itruediv__ = _forward(operator.itruediv, "__itruediv__")


def make_forwarder(
    action: Callable[[], T],
    lock: AbstractContextManager[Any] | None = None,
) -> T:
    """Return a placeholder that runs ``action`` on first use.

    The action runs at most once; its result is kept for the lifetime of the
    placeholder and receives every operation performed on it.

    Args:
        action: Deferred call producing the real instance.
        lock: Lock held while ``action`` runs. Pass the lock ``action`` itself
            acquires so that realizing the placeholder cannot deadlock against
            it. A private reentrant lock is used when omitted.

    Examples:
        >>> calls = []
        >>> value = make_forwarder(lambda: calls.append("made") or [1, 2, 3])
        >>> calls
        []
        >>> len(value), calls
        (3, ['made'])
        >>> value.count(2), calls
        (1, ['made'])

    """
    return Forwarder(action, lock)  # type: ignore[return-value]


def is_forwarder(value: object) -> bool:
    """Tell whether ``value`` is a placeholder produced by ``make_forwarder``.

    Uses ``type()``, which a forwarder cannot intercept, so this check never
    realizes the placeholder.
    """
    return type(value) is Forwarder
