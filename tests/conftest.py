"""Shared fixtures for signable tests."""

import pytest

from signable.behavior import SignableBehavior
from signable.context.request_context import RequestContext


@pytest.fixture(autouse=True)
def reset_signing_state():
    """Every test starts enabled and outside any request."""
    SignableBehavior.enable()
    RequestContext.clear()
    yield
    SignableBehavior.enable()
    RequestContext.clear()
