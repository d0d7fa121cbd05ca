"""Alembic migration scripts for DEPTREE (located via importlib.resources)."""
