"""Department directory commands: list, create, delete, move, export, import.

Every successful change prints a confirmation and then the refreshed
directory, so the listing is always the view a user returns to. Failures
leave the directory untouched and exit with status 1.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from deptree import config
from deptree.bootstrap import AppContainer, bootstrap
from deptree.domain.errors import TreeCycleError, ValidationError
from deptree.interfaces.errors import DirectoryError
from deptree.service_layer import commands
from deptree.service_layer.interchange import InterchangeFormatError
from deptree.service_layer.views import EXPORT_FILENAME

from .db import MISSING_DB_URL_MSG
from .helpers import error, success

if TYPE_CHECKING:
    from deptree.domain.department import DepartmentNode

EMPTY_DIRECTORY_MSG = "No departments."
NOT_SAVED_MSG = "Department was not saved."
APP_META_KEY = "deptree.app"


def _get_app(ctx: click.Context) -> AppContainer:
    """Return the wired application, bootstrapping it on first use.

    Tests may pass a ready-made `AppContainer` as the context object.
    """
    if isinstance(obj := ctx.find_root().obj, AppContainer):
        return obj
    if (app := ctx.meta.get(APP_META_KEY)) is None:
        try:
            app = bootstrap()
        except config.DatabaseUrlNotSetError as e:
            raise click.ClickException(MISSING_DB_URL_MSG) from e
        ctx.meta[APP_META_KEY] = app
    return app


@contextmanager
def _reporting_failures() -> Iterator[None]:
    """Turn directory, domain and format errors into CLI failures."""
    try:
        yield
    except ValidationError as e:
        for field, message in e.field_errors.items():
            error(f"{field}: {message}")
        raise click.ClickException(NOT_SAVED_MSG) from e
    except (DirectoryError, TreeCycleError, InterchangeFormatError) as e:
        raise click.ClickException(str(e)) from e


# --- rendering ---


def _label(node: DepartmentNode) -> str:
    return (
        f"{escape(node.name)} "
        f"[dim](#{node.id}, order {node.department.order_number})[/dim]"
    )


def build_tree(nodes: list[DepartmentNode]) -> Tree:
    """Build a Rich tree of the directory."""
    tree = Tree("[bold]Departments[/bold]", guide_style="dim")
    # branches[d] is where nodes at depth d get attached
    branches = [tree]
    for root in nodes:
        for depth, node in root.walk():
            del branches[depth + 1 :]
            branches.append(branches[depth].add(_label(node)))
    return tree


def _show_directory(app: AppContainer) -> None:
    nodes = app.list_tree()
    console = Console()
    if not nodes:
        console.print(EMPTY_DIRECTORY_MSG)
        return
    console.print(build_tree(nodes))


def _dispatch(ctx: click.Context, cmd: commands.Command, done: str) -> None:
    app = _get_app(ctx)
    with _reporting_failures():
        app.message_bus.handle(cmd)
    success(done)
    _show_directory(app)


# --- commands ---


@click.command(name="list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """Show the department tree."""
    _show_directory(_get_app(ctx))


@click.command()
@click.argument("name")
@click.option("--parent", "parent_id", type=int, help="Id of the parent department.")
@click.pass_context
def create(ctx: click.Context, name: str, parent_id: int | None) -> None:
    """Create a department named NAME (a root unless --parent is given)."""
    _dispatch(
        ctx,
        commands.CreateDepartment(name=name, parent_id=parent_id),
        f"Created {name!r}",
    )


@click.command()
@click.argument("department_id", type=int)
@click.pass_context
def delete(ctx: click.Context, department_id: int) -> None:
    """Delete department DEPARTMENT_ID (it must have no children)."""
    _dispatch(
        ctx,
        commands.DeleteDepartment(department_id=department_id),
        f"Deleted department {department_id}",
    )


@click.command()
@click.argument("department_id", type=int)
@click.option(
    "--parent",
    "new_parent_id",
    type=int,
    help="Id of the new parent; omit to make the department a root.",
)
@click.pass_context
def move(ctx: click.Context, department_id: int, new_parent_id: int | None) -> None:
    """Move department DEPARTMENT_ID under another parent."""
    target = "the root level" if new_parent_id is None else f"{new_parent_id}"
    _dispatch(
        ctx,
        commands.MoveDepartment(department_id=department_id, new_parent_id=new_parent_id),
        f"Moved department {department_id} to {target}",
    )


@click.command(name="export")
@click.option(
    "--output",
    "-o",
    "output",
    type=click.File("wb", lazy=True),
    default=EXPORT_FILENAME,
    show_default=True,
    help="Destination file; '-' writes to stdout.",
)
@click.pass_context
def export_(ctx: click.Context, output: BinaryIO) -> None:
    """Export every department as XML."""
    exported = _get_app(ctx).export()
    output.write(exported.content)
    if getattr(output, "name", "-") != "-":
        success(f"Exported to {output.name} ({exported.content_type})")


@click.command(name="import")
@click.argument("source", type=click.File("rb"))
@click.pass_context
def import_(ctx: click.Context, source: BinaryIO) -> None:
    """Import departments from an XML file ('-' reads stdin)."""
    payload = source.read()
    _dispatch(
        ctx,
        commands.ImportDepartments(payload=payload),
        f"Imported {getattr(source, 'name', 'stdin')}",
    )


DEPARTMENT_COMMANDS = (list_, create, delete, move, export_, import_)
