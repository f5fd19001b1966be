from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._errors import RegistrationConflict
from ._lookup import ResolutionContext
from ._registration import DEFAULT_LIFETIME, DEFAULT_REPLACE, Lifetime, Registration
from ._token import identity_for


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from ._lookup import Resolver
    from ._token import Key, TypeRef

    T = TypeVar("T")


class Container:
    """Minimal DI container.

    - register factories or pre-built instances against tokens or classes
    - lifetimes: singleton / transient
    - child containers that shadow and fall back to their parent
    - cycle detection and singleton scope checks while resolving.
    """

    def __init__(self) -> None:
        self._registrations: dict[TypeRef[Any], Registration] = {}
        self._lock = threading.RLock()

    def register(
        self,
        key: Key[T],
        factory: Callable[[Resolver], T],
        *,
        lifetime: Lifetime | str = DEFAULT_LIFETIME,
        replace: bool = DEFAULT_REPLACE,
    ) -> None:
        """Register a factory for a token.

        The factory is called with a resolver it can use to get its own
        dependencies. Singleton factories run at most once per container.

        Example:
          container.register(Db, lambda r: Db(r.get(Settings)), lifetime=Lifetime.SINGLETON)
          container.register(clock, lambda _: SystemClock())

        """
        if not callable(factory):
            msg = f"Factory for {identity_for(key).label} must be callable, got {factory!r}"
            raise TypeError(msg)

        self._set(key, Registration(factory=factory, lifetime=Lifetime(lifetime), owner=self), replace=replace)

    def register_instance(self, key: Key[T], instance: T, *, replace: bool = DEFAULT_REPLACE) -> None:
        """Register a pre-built instance (always singleton)."""
        reg = Registration(
            factory=lambda _: instance,
            lifetime=Lifetime.SINGLETON,
            owner=self,
            cached_instance=instance,
        )
        self._set(key, reg, replace=replace)

    def _set(self, key: Key[Any], reg: Registration, *, replace: bool) -> None:
        ref = identity_for(key)
        with self._lock:
            if ref in self._registrations:
                if not replace:
                    raise RegistrationConflict(ref.label)
                logger.debug("Replacing %s registration of %s", reg.lifetime.value, ref.label)
            else:
                logger.debug("Registering %s as %s", ref.label, reg.lifetime.value)
            self._registrations[ref] = reg

    def find(self, key: Key[Any]) -> Registration | None:
        """Return the registration for `key` held by this container, if any."""
        ref = identity_for(key)
        with self._lock:
            return self._registrations.get(ref)

    def has(self, key: Key[Any]) -> bool:
        return self.find(key) is not None

    @overload
    def get(self, key: TypeRef[T]) -> T: ...

    @overload
    def get(self, key: type[T]) -> T: ...

    @overload
    def get(self, key: Sequence[Key[Any]]) -> list[Any]: ...

    def get(self, key: Key[T] | Sequence[Key[Any]]) -> object:
        """Resolve a token, or a list of tokens sharing one resolution.

        Raises `ResolutionError` for unknown tokens, `ScopeError` when a
        singleton would capture a transient or another container's singleton,
        and `CycleError` when the dependency graph loops.
        """
        if isinstance(key, (list, tuple)):
            return self.get_many(key)
        return ResolutionContext(self).get(key)

    def get_many(self, keys: Iterable[Key[Any]]) -> list[Any]:
        """Resolve several tokens in order; shared dependencies are built once."""
        return ResolutionContext(self).get_many(keys)

    def child(self) -> ChildContainer:
        """Create a container that prefers its own registrations, falls back to this one."""
        return ChildContainer(self, _from_parent=True)


class ChildContainer(Container):
    """A container that looks up in itself first, then falls back to a parent container.

    Useful for per-request/per-test wiring without altering the parent's registrations.
    """

    def __init__(self, parent: Container, *, _from_parent: bool = False) -> None:
        if not _from_parent:
            msg = "ChildContainer instances must be created via Container.child()"
            raise RuntimeError(msg)
        super().__init__()
        self._parent = parent

    @property
    def parent(self) -> Container:
        return self._parent

    def find(self, key: Key[Any]) -> Registration | None:
        """Return the registration for `key` from this container or the nearest ancestor holding one."""
        return super().find(key) or self._parent.find(key)
