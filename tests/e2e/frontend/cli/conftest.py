"""Fixtures for end-to-end CLI logging tests.

Provides a test-only `log-demo` command that logs one message per level on
a project logger and on a third-party logger, plus fixtures to register it
and run the CLI inside an isolated filesystem.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from deptree.entrypoints.cli.main import deptree

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one message per level on 'deptree.demo' and on 'some.thirdparty'."""
    logger = logging.getLogger("deptree.demo")
    third_party = logging.getLogger("some.thirdparty")
    logger.debug("demo debug message")
    logger.info("demo info message")
    third_party.debug("thirdparty debug message")
    third_party.info("thirdparty info message")
    logger.warning("demo warning message")
    logger.error("demo error message")
    logger.critical("demo critical message")
    logger.debug("demo trailing debug message")


def _remove_command(group, name: str) -> None:
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the `deptree` group for one test."""
    deptree.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command(deptree, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside the runner's isolated filesystem."""
    with runner.isolated_filesystem():
        yield
