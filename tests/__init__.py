"""DEPTREE test suite.

- unit/        : domain rules, handlers on an in-memory unit of work, codec, CLI helpers.
- contract/    : one DirectoryStore suite run against every adapter.
- integration/ : SQLite engines, units of work, Alembic migrations.
- functional/  : the ``deptree`` CLI driven through ``CliRunner``.
- e2e/         : logging options of the top-level command.
"""
