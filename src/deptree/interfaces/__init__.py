"""Interfaces (application boundary) for DEPTREE.

Defines framework-free application contracts: the directory store port, the
unit of work, and the errors those contracts raise. Business rules stay out
of this package.

Dependency rule: may import `deptree.domain` only. It may be imported by
`deptree.service_layer`, `deptree.adapters`, and `deptree.bootstrap`.
"""
