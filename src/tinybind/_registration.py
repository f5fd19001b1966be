from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._container import Container
    from ._lookup import Resolver

_MISSING: Any = object()


class Lifetime(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


DEFAULT_LIFETIME = Lifetime.TRANSIENT
DEFAULT_REPLACE = False


@dataclass
class Registration:
    factory: Callable[[Resolver], object]
    lifetime: Lifetime
    owner: Container
    cached_instance: object = _MISSING  # singleton slot, filled once

    @property
    def is_singleton(self) -> bool:
        return self.lifetime is Lifetime.SINGLETON

    def create(self, resolver: Resolver) -> object:
        """Run the factory, or return the memoized instance for singletons.

        A singleton whose factory raises stays unset, so the next resolution
        tries again.
        """
        if not self.is_singleton:
            return self.factory(resolver)

        if self.cached_instance is _MISSING:
            self.cached_instance = self.factory(resolver)
            logger.debug("Singleton %r computed on container %r", self.cached_instance, self.owner)

        return self.cached_instance
