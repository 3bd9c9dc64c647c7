"""Pytest configuration and fixtures."""

import pytest

from fixdec.context import Context
from fixdec.signals import SignalAccumulator


@pytest.fixture
def flags() -> SignalAccumulator:
    """Fresh caller-owned flag accumulator."""
    return SignalAccumulator()


@pytest.fixture
def strict() -> Context:
    """Context trapping InvalidOperation, DivisionByZero and Overflow."""
    return Context.strict()


@pytest.fixture
def precise() -> Context:
    """Context with a small explicit precision (5 digits)."""
    return Context(precision=5)
