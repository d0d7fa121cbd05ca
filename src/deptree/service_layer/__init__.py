"""Service layer for DEPTREE.

Implements the directory use-cases: command handlers for create, delete,
move and import, read-side views for listing and export, and the XML
interchange codec. Transaction boundaries live here.

Dependency rule: may import `deptree.domain` and `deptree.interfaces`, but
not `deptree.adapters` or `deptree.entrypoints`.
"""
