from __future__ import annotations

from typing import Any

from autocontainer.tokens import Token, display_name


class AutocontainerError(Exception):
    """Represent a base class for all autocontainer-specific failures.

    Catch this type when you want to handle any autocontainer error path
    without matching each concrete exception class individually.
    """


class AutocontainerDependencyNotRegisteredError(AutocontainerError):
    """Signal that a token has no provider anywhere in the scope chain.

    Raised by ``Container.make`` after every alias has been followed and the
    full ancestor chain has been searched. The message carries the token's
    display name (everything from the first ``@`` on is stripped).

    Typical fixes include calling ``provide`` for the token on the scope (or
    one of its ancestors), or binding the token to a concrete token that has
    a provider.
    """

    def __init__(self, token: Token) -> None:
        self.token = token
        self.name = display_name(token)
        super().__init__(f"No provider for {self.name}")


class AutocontainerInvalidRegistrationError(AutocontainerError):
    """Signal invalid ``provide``/``bind`` arguments.

    Raised when a provider is not callable or when the cache policy is not a
    ``CachePolicy`` instance.
    """


class AutocontainerInvalidPolicyError(AutocontainerInvalidRegistrationError):
    """Signal a cache policy with an unusable capacity.

    Raised by ``Pool`` when the requested size is not a positive integer.
    A pool must hold at least one instance; use no policy at all to get a
    fresh instance on every ``make`` call.
    """

    def __init__(self, size: Any) -> None:
        self.size = size
        super().__init__(f"Pool size must be a positive integer, got {size!r}")


class AutocontainerAliasCycleError(AutocontainerInvalidRegistrationError):
    """Signal that a ``bind`` call would close an alias cycle.

    Raised by ``Container.bind`` when following the alias targets from the
    new concrete token leads back to the abstract token. Such a configuration
    could never reach a provider.

    Typical fix is binding one token of the chain to a token that has a
    provider instead of to another alias.
    """

    def __init__(self, chain: list[Token]) -> None:
        self.chain = chain
        rendered = " -> ".join(display_name(token) for token in chain)
        super().__init__(f"Alias cycle detected: {rendered}")


class AutocontainerMissingClassHintError(AutocontainerError):
    """Signal a constructor provider invoked without a class to construct.

    Raised by providers built with ``class_provider`` when neither the
    ``make`` caller nor a ``bind`` registration supplied a class hint for
    the token being resolved.

    Typical fixes include passing ``class_hint`` to ``make`` or registering
    one with ``bind(token, token, SomeClass)``.
    """

    def __init__(self, provider_name: str) -> None:
        self.provider_name = provider_name
        super().__init__(f"{provider_name} has no class hint to construct")
