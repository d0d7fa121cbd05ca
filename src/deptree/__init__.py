"""DEPTREE

An administrative tool for a hierarchical organizational directory:
departments arranged in a parent/child forest with sibling ordering,
re-parenting, and XML bulk import/export.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
