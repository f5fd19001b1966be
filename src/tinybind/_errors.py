from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from ._token import TypeRef


class ContainerError(RuntimeError):
    pass


class RegistrationConflict(ContainerError):  # noqa: N818
    def __init__(self, key: str) -> None:
        super().__init__(f"Can't register {key} twice. If you intended to replace it pass replace=True.")
        self.key = key


class ResolutionError(ContainerError):
    def __init__(self, key: str, msg: str | None = None) -> None:
        super().__init__(msg or f'Resolution failed for "{key}".')
        self.key = key


class ScopeError(ResolutionError):
    """A singleton tried to capture a transient or another container's singleton."""

    def __init__(self, key: str, dependent: str, reason: str) -> None:
        msg = f"Scope error, singleton {dependent} instantiated using {reason} {key}."
        super().__init__(key, msg)
        self.dependent = dependent


class CycleError(ResolutionError):
    """Raised when a token is requested while it is still being built.

    Each frame the error unwinds through appends its token, so the path is
    complete by the time it reaches the caller of `get`.
    """

    def __init__(self, ref: TypeRef[Any]) -> None:
        self._unwound: list[TypeRef[Any]] = [ref]
        super().__init__(ref.label, self._describe())

    def append(self, ref: TypeRef[Any]) -> None:
        self._unwound.append(ref)
        self.args = (self._describe(),)

    @property
    def path(self) -> tuple[TypeRef[Any], ...]:
        """Tokens on the cycle, in the order they were visited."""
        return tuple(reversed(self._unwound))

    def _describe(self) -> str:
        return f"Dependency cycle caused by {' -> '.join(r.label for r in self.path)}."
