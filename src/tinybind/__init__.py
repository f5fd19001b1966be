"""Tiny dependency injection container.

This package maps abstract type identities to factories and builds object
graphs on demand, with configurable lifetimes, child containers and cycle
detection.

Exports:
- `Container`: DI container for factory/instance registration and resolution.
- `ChildContainer`: container created by `Container.child()` that resolves within
  itself first, then falls back to its parent.
- `Lifetime`: Enum for controlling object lifetimes (singleton or transient).
- `TypeRef` / `ref`: explicit type identity tokens; classes work as keys too.
- `identity_for`: the token a class or token key resolves to.
- `Resolver`: what factories receive to resolve their own dependencies.
- Errors: `RegistrationConflict`, `ResolutionError`, `ScopeError`, `CycleError`,
  all subclasses of `ContainerError`.
"""

import logging

from ._container import ChildContainer, Container
from ._errors import ContainerError, CycleError, RegistrationConflict, ResolutionError, ScopeError
from ._lookup import Resolver
from ._registration import Lifetime
from ._token import TypeRef, identity_for, ref


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "ChildContainer",
    "Container",
    "ContainerError",
    "CycleError",
    "Lifetime",
    "RegistrationConflict",
    "ResolutionError",
    "Resolver",
    "ScopeError",
    "TypeRef",
    "identity_for",
    "ref",
]
