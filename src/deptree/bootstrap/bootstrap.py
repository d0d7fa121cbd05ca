"""Bootstrap the message bus with handlers and unit of work."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from deptree import config
from deptree.adapters.db.engine import make_engine
from deptree.adapters.unit_of_work import SqlAlchemyUnitOfWork
from deptree.interfaces.unit_of_work import AbstractUnitOfWork
from deptree.service_layer import views
from deptree.service_layer.handlers import COMMAND_HANDLERS
from deptree.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from deptree.domain.department import DepartmentNode
    from deptree.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """Application wiring handed to entrypoints."""

    message_bus: MessageBus

    def list_tree(self) -> list[DepartmentNode]:
        """Run the directory listing view."""
        return views.list_tree(self.message_bus.uow)

    def export(self) -> views.ExportedFile:
        """Run the XML export view."""
        return views.export_departments(self.message_bus.uow)


def build_uow(url: str) -> AbstractUnitOfWork:
    """Build a new database-backed unit of work."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def build_message_bus(
    uow: AbstractUnitOfWork, command_handlers: dict[type[Command], Callable[..., None]]
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {"uow": uow}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
    )


def bootstrap(uow: AbstractUnitOfWork | None = None) -> AppContainer:
    """Wire the application.

    Args:
        uow: Unit of work to use; defaults to one built from `DEPTREE_DB_URL`.

    Raises:
        DatabaseUrlNotSetError: If no unit of work is given and
            `DEPTREE_DB_URL` is not set.
    """
    if uow is None:
        uow = build_uow(config.get_db_url())
    return AppContainer(message_bus=build_message_bus(uow, COMMAND_HANDLERS))


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)
