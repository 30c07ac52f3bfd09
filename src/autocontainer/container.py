from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any, TypeVar, overload

from typing_extensions import Self

from autocontainer.defaults import DEFAULT_LOCK_MODE
from autocontainer.exceptions import (
    AutocontainerDependencyNotRegisteredError,
    AutocontainerInvalidRegistrationError,
)
from autocontainer.forwarding import make_forwarder
from autocontainer.instance_cache import InstanceCache
from autocontainer.lock_mode import LockMode
from autocontainer.policies import CachePolicy
from autocontainer.providers import ClassHint, Provider
from autocontainer.registry import TokenRegistry
from autocontainer.tokens import Token, display_name

T = TypeVar("T")
P = TypeVar("P", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class Container:
    """Resolve tokens to instances through a chain of scopes.

    A container is one scope: it owns a token registry, an instance cache and
    the stack of tokens it is currently building. ``inner()`` creates a child
    scope whose provider and alias lookups fall back to this one. Cache
    policies and cached instances are never shared along the chain: they
    belong to the scope ``make`` was called on.

    Synchronous cycles are broken with forwarders. When a provider ends up
    asking for a token that is already under construction, it receives a
    placeholder that performs the ``make`` call on first use instead.

    Examples:
        >>> container = Container.create()
        >>> container.provide("greeting", lambda scope, hint: "hello").make("greeting")
        'hello'

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = DEFAULT_LOCK_MODE,
        parent: Container | None = None,
    ) -> None:
        """Create a scope.

        Args:
            lock_mode: How this scope serialises resolution. ``LockMode.THREAD``
                holds a reentrant lock across every ``make`` call,
                ``LockMode.NONE`` assumes the scope is used from one thread.
            parent: Scope to delegate provider and alias lookups to. Fixed for
                the lifetime of this scope. Prefer ``inner()`` over passing it.

        Raises:
            AutocontainerInvalidRegistrationError: If ``lock_mode`` is not a
                ``LockMode`` member.

        """
        if not isinstance(lock_mode, LockMode):
            msg = f"lock_mode must be a LockMode member, got {lock_mode!r}"
            raise AutocontainerInvalidRegistrationError(msg)

        self._parent = parent
        self._lock_mode = lock_mode
        self._registry = TokenRegistry()
        self._cache = InstanceCache()
        self._stack: list[Token] = []
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    @classmethod
    def create(cls, *, lock_mode: LockMode = DEFAULT_LOCK_MODE) -> Self:
        """Create a root scope with no parent."""
        return cls(lock_mode=lock_mode)

    @property
    def parent(self) -> Container | None:
        return self._parent

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def inner(self) -> Container:
        """Create a child scope delegating to this one.

        The child starts with an empty registry and an empty cache. Providers
        it registers shadow this scope's providers for resolutions started on
        the child; resolutions started here are unaffected.
        """
        return type(self)(lock_mode=self._lock_mode, parent=self)

    def provide(
        self,
        token: Token,
        provider: Provider,
        *,
        policy: CachePolicy | None = None,
    ) -> Self:
        """Register ``provider`` for ``token`` in this scope.

        Any provider previously registered for the same token in this scope is
        replaced, and the token's cache policy is replaced by ``policy`` (or
        cleared when ``policy`` is None).

        Args:
            token: Token the provider produces.
            provider: Callable invoked as ``provider(scope, class_hint)``.
            policy: Optional ``Singleton()`` or ``Pool(n)`` cache policy.

        Returns:
            This container, for chaining.

        Raises:
            AutocontainerInvalidRegistrationError: If ``provider`` is not
                callable or ``policy`` is not a ``CachePolicy``.

        """
        if not callable(provider):
            msg = f"Provider for {display_name(token)} must be callable, got {provider!r}"
            raise AutocontainerInvalidRegistrationError(msg)
        _validate_policy(token, policy)

        with self._lock:
            self._registry.set_provider(token, provider)
            self._registry.set_policy(token, policy)
        logger.debug("Registered provider for %s with policy %r", display_name(token), policy)
        return self

    def provides(self, token: Token, *, policy: CachePolicy | None = None) -> Callable[[P], P]:
        """Register the decorated callable as the provider for ``token``.

        Examples:
            >>> container = Container.create()
            >>> @container.provides("answer")
            ... def make_answer(scope: Container, hint: object) -> int:
            ...     return 42
            >>> container.make("answer")
            42

        """

        def decorator(provider: P) -> P:
            self.provide(token, provider, policy=policy)
            return provider

        return decorator

    def bind(
        self,
        abstract_token: Token,
        concrete_token: Token,
        class_hint: ClassHint | None = None,
        *,
        policy: CachePolicy | None = None,
    ) -> Self:
        """Alias a token to another and attach resolution metadata.

        When the two tokens differ, resolving ``abstract_token`` resolves
        ``concrete_token`` instead. With equal tokens no alias is recorded,
        which lets callers attach a class hint or a policy to a token's own
        identity.

        The policy is attached to ``abstract_token`` and is checked before the
        alias is followed, so an abstract token can be cached independently of
        its concrete target.

        Args:
            abstract_token: Token callers ask for.
            concrete_token: Token actually resolved.
            class_hint: Constructor associated with ``concrete_token``, passed
                to its provider when ``make`` is called without one.
            policy: Cache policy for ``abstract_token``; None clears it.

        Returns:
            This container, for chaining.

        Raises:
            AutocontainerAliasCycleError: If the alias would close a cycle of
                aliases in this scope.
            AutocontainerInvalidRegistrationError: If ``policy`` is not a
                ``CachePolicy``.

        """
        _validate_policy(abstract_token, policy)

        with self._lock:
            if abstract_token != concrete_token:
                self._registry.set_alias(abstract_token, concrete_token)
            if class_hint is not None:
                self._registry.set_class_hint(concrete_token, class_hint)
            self._registry.set_policy(abstract_token, policy)
        logger.debug(
            "Bound %s to %s with policy %r",
            display_name(abstract_token),
            display_name(concrete_token),
            policy,
        )
        return self

    @overload
    def make(self, token: Token, class_hint: type[T]) -> T: ...

    @overload
    def make(self, token: Token, class_hint: Callable[..., Any] | None = None) -> Any: ...

    def make(self, token: Token, class_hint: ClassHint | None = None) -> Any:
        """Resolve ``token`` to an instance.

        The cache policy registered for this exact token in this scope is
        consulted first; a full pool hands out its next instance without
        resolving anything. Otherwise the token is resolved (following an
        alias, breaking a cycle, or calling a provider found in this scope or
        an ancestor) and the result is pooled if the policy has room.

        Args:
            token: Token to resolve.
            class_hint: Concrete class for the token, when the caller knows it.
                Falls back to the class hint registered with ``bind``.

        Returns:
            The instance, or a forwarder to it when ``token`` is already being
            built further up the current call.

        Raises:
            AutocontainerDependencyNotRegisteredError: If no provider is found
                for the token in this scope or any ancestor.

        """
        with self._lock:
            policy = self._registry.find_policy(token)
            if policy is not None:
                cached = self._cache.recycle(token, policy)
                if not InstanceCache.is_miss(cached):
                    return cached

            instance = self._resolve(token, self, class_hint)

            if policy is not None:
                self._cache.store(token, policy, instance)
            return instance

    def is_registered(self, token: Token) -> bool:
        """Tell whether this scope or an ancestor has a provider or alias for ``token``."""
        scope: Container | None = self
        while scope is not None:
            if scope._registry.knows(token):
                return True
            scope = scope._parent
        return False

    def cached_count(self, token: Token) -> int:
        """Return how many instances this scope currently pools for ``token``."""
        with self._lock:
            return self._cache.count(token)

    def _resolve(self, token: Token, origin: Container, class_hint: ClassHint | None) -> Any:
        concrete_token = self._registry.find_alias(token)
        if concrete_token is not None:
            logger.debug(
                "Resolving %s through %s",
                display_name(token),
                display_name(concrete_token),
            )
            return self.make(concrete_token)

        if token in self._stack:
            logger.debug("Cycle on %s, deferring with a forwarder", display_name(token))
            return make_forwarder(lambda: self.make(token, class_hint), self._lock)

        self._stack.append(token)
        try:
            provider = self._registry.find_provider(token)
            if provider is None:
                if self._parent is None:
                    logger.debug("No provider for %s", display_name(token))
                    raise AutocontainerDependencyNotRegisteredError(token)
                logger.debug("Delegating %s to the parent scope", display_name(token))
                return self._parent._delegate(token, origin, class_hint)

            if class_hint is None:
                class_hint = self._registry.find_class_hint(token)
            return provider(origin, class_hint)
        finally:
            self._stack.pop()

    def _delegate(self, token: Token, origin: Container, class_hint: ClassHint | None) -> Any:
        # Called by a child scope holding its own lock, lock order is child then parent.
        with self._lock:
            return self._resolve(token, origin, class_hint)


def create(*, lock_mode: LockMode = DEFAULT_LOCK_MODE) -> Container:
    """Create a root scope with no parent."""
    return Container.create(lock_mode=lock_mode)


def _validate_policy(token: Token, policy: object) -> None:
    if policy is not None and not isinstance(policy, CachePolicy):
        msg = (
            f"Cache policy for {display_name(token)} must be Singleton() or Pool(n), "
            f"got {policy!r}"
        )
        raise AutocontainerInvalidRegistrationError(msg)
