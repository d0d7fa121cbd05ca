"""Alembic environment for the DEPTREE schema.

The URL comes from ``sqlalchemy.url`` on the config that
:func:`deptree.config.build_alembic_config` builds, falling back to
``DEPTREE_DB_URL``. SQLite runs in batch mode because it cannot ALTER most
constraints in place.
"""

from alembic import context

from deptree import config as deptree_config
from deptree.adapters.db.engine import make_engine
from deptree.adapters.db.metadata import metadata
from deptree.adapters.directory_store import schema  # noqa: F401 # pylint: disable=unused-import

# pylint: disable=no-member

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def _database_url() -> str:
    url = context.config.get_main_option(deptree_config.ALEMBIC_URL_KEY)
    return url or deptree_config.get_db_url()


def _emit_sql() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate() -> None:
    engine = make_engine(_database_url())
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=metadata,
                render_as_batch=connection.dialect.name == "sqlite",
                **COMPARE_OPTIONS,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    _emit_sql()
else:
    _migrate()
