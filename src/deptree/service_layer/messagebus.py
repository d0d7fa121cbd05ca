"""Synchronous command dispatch."""

import logging
from collections.abc import Callable, Mapping

from deptree.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

Handler = Callable[[Command], None]

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Raised when a command type has no registered handler."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")
        self.command = cmd


def _describe(handler: Handler) -> str:
    # bootstrap binds dependencies with functools.partial
    target = getattr(handler, "func", handler)
    return getattr(target, "__qualname__", repr(handler))


class MessageBus:
    """Route each directory command to exactly one handler.

    Handler failures are logged with their traceback and re-raised as they
    are, so callers keep the typed directory and domain errors.

    Args:
        uow: The unit of work the handlers were bound to, kept so read-side
            views can use the same storage.
        command_handlers: Command type to handler, dependencies already bound.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: Mapping[type[Command], Handler],
    ) -> None:
        self.uow = uow
        self._command_handlers = dict(command_handlers)

    def handle(self, cmd: Command) -> None:
        """Run the handler registered for ``type(cmd)``.

        Raises:
            NoHandlerForCommand: If nothing handles this command type.
        """
        handler = self._command_handlers.get(type(cmd))
        if handler is None:
            raise NoHandlerForCommand(cmd)

        logger.debug("Dispatching %r to %s", cmd, _describe(handler))
        try:
            handler(cmd)
        except Exception:  # pylint: disable=broad-except
            logger.exception("%s failed for %r", _describe(handler), cmd)
            raise
