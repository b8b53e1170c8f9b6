"""Application-layer errors — wiring and dispatch failures."""

from __future__ import annotations

from typing import Any, Iterable

from allocation.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class MissingDependencyError(ApplicationError):
    """A handler needs a collaborator that is not in the dependency map."""

    default_code = "missing_dependency"

    def __init__(self, handler: str, missing: Iterable[str], **kwargs: Any) -> None:
        names = tuple(missing)
        super().__init__(
            f"Handler {handler!r} is missing dependencies: {', '.join(names)}",
            detail={"handler": handler, "missing": list(names)},
            **kwargs,
        )
        self.handler = handler
        self.missing = names


class UnknownMessageError(ApplicationError):
    """The bus has no route for a message."""

    default_code = "unknown_message"

    def __init__(self, message: Any, **kwargs: Any) -> None:
        name = type(message).__name__
        super().__init__(f"No handler registered for {name!r}", detail={"message_type": name}, **kwargs)
        self.message_type = name


class MessageQueueOverflowError(ApplicationError):
    """A single ``handle()`` call processed more messages than allowed."""

    default_code = "message_queue_overflow"

    def __init__(self, limit: int, **kwargs: Any) -> None:
        super().__init__(
            f"Processed more than {limit} messages in one handle() call; "
            "handlers are probably re-triggering each other",
            detail={"limit": limit},
            **kwargs,
        )
        self.limit = limit


class BootstrapError(ApplicationError):
    """The composition root could not assemble the message bus."""

    default_code = "bootstrap_error"


class UnknownBootstrapOptionError(BootstrapError):
    """``bootstrap()`` was called with options it does not recognise."""

    default_code = "unknown_bootstrap_option"

    def __init__(self, options: Iterable[str], **kwargs: Any) -> None:
        names = sorted(options)
        super().__init__(
            f"Unrecognised bootstrap options: {', '.join(names)}",
            detail={"options": names},
            **kwargs,
        )
        self.options = names


__all__ = [
    "ApplicationError",
    "BootstrapError",
    "MessageQueueOverflowError",
    "MissingDependencyError",
    "UnknownBootstrapOptionError",
    "UnknownMessageError",
]
