from autocontainer.container import Container, create
from autocontainer.exceptions import (
    AutocontainerAliasCycleError,
    AutocontainerDependencyNotRegisteredError,
    AutocontainerError,
    AutocontainerInvalidPolicyError,
    AutocontainerInvalidRegistrationError,
    AutocontainerMissingClassHintError,
)
from autocontainer.forwarding import Forwarder, is_forwarder, make_forwarder
from autocontainer.lock_mode import LockMode
from autocontainer.policies import CachePolicy, Pool, Singleton
from autocontainer.providers import class_provider
from autocontainer.tokens import display_name

__all__ = [
    "AutocontainerAliasCycleError",
    "AutocontainerDependencyNotRegisteredError",
    "AutocontainerError",
    "AutocontainerInvalidPolicyError",
    "AutocontainerInvalidRegistrationError",
    "AutocontainerMissingClassHintError",
    "CachePolicy",
    "Container",
    "Forwarder",
    "LockMode",
    "Pool",
    "Singleton",
    "class_provider",
    "create",
    "display_name",
    "is_forwarder",
    "make_forwarder",
]
