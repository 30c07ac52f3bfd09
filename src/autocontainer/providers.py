from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

from autocontainer.exceptions import AutocontainerMissingClassHintError
from autocontainer.tokens import Token

if TYPE_CHECKING:
    from autocontainer.container import Container

ClassHint: TypeAlias = "type[Any] | Callable[..., Any]"
"""A concrete constructor passed alongside a token when the target is a class."""

Provider: TypeAlias = "Callable[[Container, ClassHint | None], Any]"
"""A factory called as ``provider(scope, class_hint)``.

The scope is the one ``make`` was originally invoked on, so the provider can
resolve its own dependencies through it.
"""

Dependency: TypeAlias = "Token | tuple[Token, ClassHint | None]"
"""A constructor argument: a token, or a token with the class hint for it."""


def class_provider(*dependencies: Dependency) -> Provider:
    """Build a provider that constructs the class hint from resolved tokens.

    This is the runtime shape of the providers the code generation stage
    registers for every concrete class it sees: each constructor parameter
    is resolved positionally with ``scope.make`` and the class hint is called
    with the results.

    Args:
        *dependencies: One entry per constructor parameter, either a token or
            a ``(token, class_hint)`` pair for parameters typed as concrete
            classes.

    Returns:
        A provider accepting ``(scope, class_hint)``.

    Raises:
        AutocontainerMissingClassHintError: When the provider runs without a
            class hint to construct.

    """
    normalized = [
        dependency if isinstance(dependency, tuple) else (dependency, None)
        for dependency in dependencies
    ]
    name = f"class_provider({', '.join(token for token, _ in normalized)})"

    def provide(scope: Container, class_hint: ClassHint | None) -> Any:
        if class_hint is None:
            raise AutocontainerMissingClassHintError(name)
        arguments = [scope.make(token, hint) for token, hint in normalized]
        return class_hint(*arguments)

    provide.__qualname__ = name
    return provide
