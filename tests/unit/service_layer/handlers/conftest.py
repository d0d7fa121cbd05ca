"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from .fakes import bootstrap_test_bus

if TYPE_CHECKING:
    from deptree.service_layer.messagebus import MessageBus

# pylint: disable=redefined-outer-name


@pytest.fixture
def make_test_bus() -> Callable[..., MessageBus]:
    """Factory to create a message bus over an empty in-memory directory."""

    def _make():
        return bootstrap_test_bus()

    return _make
