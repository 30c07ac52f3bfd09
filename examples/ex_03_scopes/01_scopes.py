"""Scopes: children override providers without touching their parent.

``inner()`` creates a child scope. Lookups that miss in the child fall back to
the parent, but cache policies and cached instances belong to the scope
``make`` was called on.
"""

from __future__ import annotations

from autocontainer import Container, Singleton


class Settings:
    def __init__(self, environment: str) -> None:
        self.environment = environment


def main() -> None:
    root = Container.create()
    root.provide("Settings", lambda scope, hint: Settings("production"), policy=Singleton())

    request = root.inner()
    print(f"inherited={request.make('Settings').environment}")  # => inherited=production

    test = root.inner()
    test.provide("Settings", lambda scope, hint: Settings("test"))
    print(f"child={test.make('Settings').environment}")  # => child=test
    print(f"parent={root.make('Settings').environment}")  # => parent=production

    # The policy lives on the root only, so each child needs its own to cache.
    left = root.inner()
    right = root.inner()
    left.bind("Settings", "Settings", policy=Singleton())
    right.bind("Settings", "Settings", policy=Singleton())
    print(f"siblings_share={left.make('Settings') is right.make('Settings')}")  # => siblings_share=False
    print(f"sibling_is_stable={left.make('Settings') is left.make('Settings')}")  # => sibling_is_stable=True


if __name__ == "__main__":
    main()
