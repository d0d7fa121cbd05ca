"""Adapters (infrastructure) for DEPTREE.

Provide concrete implementations of the interfaces (database-backed and
in-memory directory stores, the unit of work), plus persistence mapping and
related wiring (engines, metadata, migrations).

Dependency rule: may import `deptree.domain` and `deptree.interfaces`; inner
layers must not import this package.
"""
