from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from autocontainer.exceptions import AutocontainerInvalidPolicyError


class CachePolicy(ABC):
    """Define how many instances a scope keeps for one token.

    A token without a policy is resolved fresh on every ``make`` call. A token
    with a policy is pooled in the scope that ``make`` was invoked on: the
    first ``capacity`` results are stored, after which stored instances are
    handed out in rotation.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Return the maximum number of instances kept per scope."""


@dataclass(frozen=True, slots=True)
class Singleton(CachePolicy):
    """Keep exactly one instance per scope."""

    @property
    def capacity(self) -> int:
        return 1


@dataclass(frozen=True, slots=True)
class Pool(CachePolicy):
    """Keep up to ``size`` instances per scope and rotate through them."""

    size: int

    def __post_init__(self) -> None:
        # bool is an int subclass, Pool(True) is almost certainly a mistake
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1:
            raise AutocontainerInvalidPolicyError(self.size)

    @property
    def capacity(self) -> int:
        return self.size
