"""Shared pytest fixtures for autocontainer tests."""

import itertools
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from autocontainer.container import Container
from autocontainer.lock_mode import LockMode
from tests.helpers import Tagged


@pytest.fixture()
def container() -> Container:
    """Default root scope with thread locking."""
    return Container.create()


@pytest.fixture()
def container_unlocked() -> Container:
    """Root scope without locking."""
    return Container.create(lock_mode=LockMode.NONE)


@pytest.fixture()
def tagged_provider() -> Callable[[Container, Any], Tagged]:
    """Provider producing ``Tagged`` instances numbered 1, 2, 3, ..."""
    counter: Iterator[int] = itertools.count(1)

    def provide(scope: Container, hint: Any) -> Tagged:
        return Tagged(next(counter))

    return provide
