"""Bootstrap (composition root) for DEPTREE.

Assembles the application at runtime: wires concrete adapters to the
service-layer handlers, composes the message bus and unit of work, reads
configuration, and exposes the read-side views to entrypoints.

Import rules:
- Entry points import *this* package (not adapters/service_layer directly
  for wiring).
- This package may import: `deptree.adapters`, `deptree.service_layer`,
  `deptree.interfaces`, `deptree.domain`, and `deptree.config`.
- Inner layers must not import `deptree.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap

__all__ = ["AppContainer", "bootstrap"]
