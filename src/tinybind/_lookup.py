from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, overload

from ._errors import CycleError, ResolutionError, ScopeError
from ._token import identity_for


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._container import Container
    from ._registration import Registration
    from ._token import Key, TypeRef

    T = TypeVar("T")


class Resolver(Protocol):
    """What factories receive: a view on the resolution in progress."""

    @overload
    def get(self, key: TypeRef[T]) -> T: ...

    @overload
    def get(self, key: type[T]) -> T: ...

    def get(self, key: Key[T]) -> T: ...

    def get_many(self, keys: Iterable[Key[Any]]) -> list[Any]: ...


class _State(Enum):
    IN_PROGRESS = "in-progress"
    FINISHED = "finished"


_BUILDING = (_State.IN_PROGRESS, None, None)


class ResolutionContext:
    """Per-call traversal state.

    Created by `Container.get`/`get_many` and dropped when the call returns.
    Every token is built at most once per context, so dependents requested in
    the same call share instances even when the registration is transient.
    """

    def __init__(self, container: Container) -> None:
        self._container = container
        self._resolved: dict[TypeRef[Any], tuple[_State, object, Registration | None]] = {}

    def get(self, key: Key[T]) -> T:
        return ScopedResolver(self).get(key)

    def get_many(self, keys: Iterable[Key[Any]]) -> list[Any]:
        return ScopedResolver(self).get_many(keys)

    def resolve(self, ref: TypeRef[T], view: ScopedResolver) -> T:
        slot = self._resolved.get(ref)
        if slot is not None:
            state, value, reg = slot
            if state is _State.IN_PROGRESS:
                logger.debug("Dependency cycle detected at %s", ref.label)
                raise CycleError(ref)
            view.check(ref, reg)  # type: ignore[arg-type]
            return value  # type: ignore[return-value]

        reg = self._container.find(ref)
        if reg is None:
            raise ResolutionError(ref.label)

        view.check(ref, reg)

        self._resolved[ref] = _BUILDING
        try:
            instance = reg.create(ScopedResolver(self, building=reg, dependent=ref))
        except Exception as e:
            del self._resolved[ref]
            if isinstance(e, CycleError):
                e.append(ref)
            raise

        self._resolved[ref] = (_State.FINISHED, instance, reg)
        return instance  # type: ignore[return-value]


class ScopedResolver:
    """Resolver handed to one factory call.

    Carries the registration being built, so lookups made by a singleton's
    factory can be held to singleton rules.
    """

    def __init__(
        self,
        context: ResolutionContext,
        *,
        building: Registration | None = None,
        dependent: TypeRef[Any] | None = None,
    ) -> None:
        self._context = context
        self._building = building
        self._dependent = dependent

    @overload
    def get(self, key: TypeRef[T]) -> T: ...

    @overload
    def get(self, key: type[T]) -> T: ...

    def get(self, key: Key[T]) -> T:
        return self._context.resolve(identity_for(key), self)

    def get_many(self, keys: Iterable[Key[Any]]) -> list[Any]:
        return [self.get(key) for key in keys]

    def check(self, ref: TypeRef[Any], reg: Registration) -> None:
        """Reject dependencies a singleton must not capture.

        A singleton may only depend on singletons owned by its own container.
        Transient resolutions are not restricted.
        """
        if self._building is None or not self._building.is_singleton:
            return

        dependent = self._dependent.label if self._dependent is not None else "?"
        if not reg.is_singleton:
            logger.debug("Singleton %s depends on transient %s", dependent, ref.label)
            raise ScopeError(ref.label, dependent, "transient")

        if reg.owner is not self._building.owner:
            logger.debug("Singleton %s depends on cross container singleton %s", dependent, ref.label)
            raise ScopeError(ref.label, dependent, "cross container singleton")
