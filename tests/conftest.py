# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from tests.machines import Count, Posture, count_mapper, posture_mapper


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def posture_machine():
    """A sit/stand machine starting in STANDING."""
    from minifsm import StateMachine

    return StateMachine(Posture.STANDING, posture_mapper, name="posture")


@pytest.fixture
def count_machine():
    """An observable counter starting at Count(0)."""
    from minifsm import ObservableStateMachine

    return ObservableStateMachine(Count(0), count_mapper, name="counter")


@pytest.fixture
def spy():
    """A callback mock."""
    return MagicMock()


@pytest.fixture
def call_log():
    """A shared list and a factory of callbacks appending (label, args) to it."""
    log = []

    def recorder(label):
        def _record(*args):
            log.append((label, args))

        return _record

    return log, recorder
