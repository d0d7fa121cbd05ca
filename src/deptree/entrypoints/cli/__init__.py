"""The ``deptree`` command-line interface."""
