"""Errors: what autocontainer reports and when.

Missing providers fail at ``make`` time and name the token without its
``@`` suffix. Alias cycles and unusable pool sizes fail at registration time.
"""

from __future__ import annotations

from autocontainer import (
    AutocontainerAliasCycleError,
    AutocontainerDependencyNotRegisteredError,
    AutocontainerInvalidPolicyError,
    Container,
    Pool,
)


def main() -> None:
    container = Container.create()

    try:
        container.inner().make("PaymentGateway@app/payments.py")
    except AutocontainerDependencyNotRegisteredError as error:
        print(f"missing={error}")  # => missing=No provider for PaymentGateway

    container.bind("Reader", "Source")
    try:
        container.bind("Source", "Reader")
    except AutocontainerAliasCycleError as error:
        print(f"cycle={error}")  # => cycle=Alias cycle detected: Source -> Reader -> Source

    try:
        Pool(0)
    except AutocontainerInvalidPolicyError as error:
        print(f"policy={error}")  # => policy=Pool size must be a positive integer, got 0


if __name__ == "__main__":
    main()
