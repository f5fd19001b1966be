from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Generic, TypeVar


T = TypeVar("T")


class TypeRef(Generic[T]):
    """Opaque identity of an abstract type.

    Two refs are equal only when they are the same object; the label is
    used for diagnostics and nothing else.
    """

    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label

    def __repr__(self) -> str:
        return f"TypeRef({self.label!r})"


if TYPE_CHECKING:
    Key = TypeRef[T] | type[T]


def ref(label: str) -> TypeRef[Any]:
    """Create a fresh token labelled `label`."""
    return TypeRef(label)


class IdentityResolver:
    """Maps classes to stable tokens.

    The table grows with every distinct class ever used as a key and is
    never cleared; classes live as long as the process anyway.
    """

    def __init__(self) -> None:
        self._refs: dict[type, TypeRef[Any]] = {}

    def identity_for(self, key: Key[T]) -> TypeRef[T]:
        if isinstance(key, TypeRef):
            return key

        if not inspect.isclass(key):
            msg = f"Keys must be TypeRef tokens or classes, got {key!r}"
            raise TypeError(msg)

        found = self._refs.get(key)
        if found is None:
            found = self._refs[key] = TypeRef(key.__name__)
        return found


_identities = IdentityResolver()


def identity_for(key: Key[T]) -> TypeRef[T]:
    """Return the token for `key`, minting one for classes seen the first time."""
    return _identities.identity_for(key)
