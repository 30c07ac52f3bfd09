from __future__ import annotations

from autocontainer.exceptions import AutocontainerAliasCycleError
from autocontainer.policies import CachePolicy
from autocontainer.providers import ClassHint, Provider
from autocontainer.tokens import Token


class TokenRegistry:
    """Store one scope's providers, class hints, aliases and cache policies.

    The four maps are independent: a token can carry a policy without a
    provider (the provider may live in an ancestor scope), and an alias is
    followed before the token's own provider is looked at. Registration keys
    are unique, adding an entry for an existing token replaces it.
    """

    def __init__(self) -> None:
        self._providers: dict[Token, Provider] = {}
        self._class_hints: dict[Token, ClassHint] = {}
        self._aliases: dict[Token, Token] = {}
        self._policies: dict[Token, CachePolicy] = {}

    def set_provider(self, token: Token, provider: Provider) -> None:
        self._providers[token] = provider

    def find_provider(self, token: Token) -> Provider | None:
        return self._providers.get(token)

    def set_class_hint(self, token: Token, class_hint: ClassHint) -> None:
        self._class_hints[token] = class_hint

    def find_class_hint(self, token: Token) -> ClassHint | None:
        return self._class_hints.get(token)

    def set_policy(self, token: Token, policy: CachePolicy | None) -> None:
        """Attach ``policy`` to ``token``, or clear it when ``policy`` is None."""
        if policy is None:
            self._policies.pop(token, None)
        else:
            self._policies[token] = policy

    def find_policy(self, token: Token) -> CachePolicy | None:
        return self._policies.get(token)

    def set_alias(self, abstract_token: Token, concrete_token: Token) -> None:
        """Redirect ``abstract_token`` to ``concrete_token``.

        Args:
            abstract_token: Token whose resolution is redirected.
            concrete_token: Token resolved in its place.

        Raises:
            AutocontainerAliasCycleError: If following aliases from
                ``concrete_token`` leads back to ``abstract_token``.

        """
        chain = [abstract_token, concrete_token]
        current = concrete_token
        while current != abstract_token:
            target = self._aliases.get(current)
            if target is None:
                break
            chain.append(target)
            current = target
        else:
            raise AutocontainerAliasCycleError(chain)
        self._aliases[abstract_token] = concrete_token

    def find_alias(self, token: Token) -> Token | None:
        return self._aliases.get(token)

    def knows(self, token: Token) -> bool:
        """Tell whether ``token`` has a provider or an alias in this registry."""
        return token in self._providers or token in self._aliases
