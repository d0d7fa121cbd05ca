"""Entrypoints for DEPTREE (command line)."""
