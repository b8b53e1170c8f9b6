"""Application – signature-driven dependency injection for message handlers.

A handler declares its collaborators by parameter name::

    async def allocate(cmd: commands.Allocate, uow: UnitOfWork) -> str: ...

:func:`inject` binds the parameters found in a dependency map once, at
bootstrap time, and returns a callable that takes only the message. The same
handler tables therefore serve production and tests; only the map changes.
"""
from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

from allocation.kernel.errors import MissingDependencyError
from allocation.kernel.messaging import Message

Handler = Callable[..., Awaitable[Any]]


class BoundHandler:
    """A handler with its dependencies fixed; awaited with the message alone."""

    __slots__ = ("_handler", "_dependencies", "_missing", "name")

    def __init__(
        self,
        handler: Handler,
        dependencies: Mapping[str, Any],
        missing: tuple[str, ...],
    ) -> None:
        self._handler = handler
        self._dependencies = MappingProxyType(dict(dependencies))
        self._missing = missing
        self.name = f"{handler.__module__}.{handler.__qualname__}"

    @property
    def handler(self) -> Handler:
        return self._handler

    @property
    def dependencies(self) -> Mapping[str, Any]:
        """Read-only view of the collaborators bound to this handler."""
        return self._dependencies

    @property
    def missing(self) -> tuple[str, ...]:
        """Required parameters the dependency map could not satisfy."""
        return self._missing

    async def __call__(self, message: Message) -> Any:
        if self._missing:
            raise MissingDependencyError(self.name, self._missing)
        return await self._handler(message, **self._dependencies)

    def __repr__(self) -> str:
        deps = ", ".join(self._dependencies)
        return f"<BoundHandler {self.name}({deps})>"


def inject(handler: Handler, dependencies: Mapping[str, Any]) -> BoundHandler:
    """Bind the subset of *dependencies* that *handler* asks for by name.

    The first parameter is the message and is never bound. Parameters with a
    default that the map does not provide keep their default; required ones
    are reported through :attr:`BoundHandler.missing` and make the bound
    handler raise :class:`MissingDependencyError` when awaited.
    """
    params = list(inspect.signature(handler).parameters.values())[1:]
    bound: dict[str, Any] = {}
    missing: list[str] = []
    for param in params:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.name in dependencies:
            bound[param.name] = dependencies[param.name]
        elif param.default is param.empty:
            missing.append(param.name)
    return BoundHandler(handler, bound, tuple(missing))


__all__ = ["BoundHandler", "Handler", "inject"]
