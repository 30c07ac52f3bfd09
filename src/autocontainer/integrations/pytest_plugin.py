"""Pytest fixtures for tests that build object graphs with autocontainer.

Enable the plugin from a test module or the root ``conftest.py``::

    pytest_plugins = ["autocontainer.integrations.pytest_plugin"]

"""

from __future__ import annotations

import pytest

from autocontainer.container import Container


@pytest.fixture()
def autocontainer() -> Container:
    """Create a per-test root scope.

    The fixture is function-scoped, so registrations are isolated between
    tests unless users override the fixture with a wider scope.

    Returns:
        A new root ``Container``.

    """
    return Container.create()


@pytest.fixture()
def autocontainer_scope(autocontainer: Container) -> Container:
    """Create a child scope of the per-test root scope.

    Register test doubles here to shadow providers registered on
    ``autocontainer`` without touching the root scope.

    Returns:
        The result of ``autocontainer.inner()``.

    """
    return autocontainer.inner()
