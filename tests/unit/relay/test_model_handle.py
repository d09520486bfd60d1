"""Unit tests for ModelHandle."""

import pytest

from phish_relay.relay.model_handle import HandleState, ModelHandle


def test_starts_unbound():
    handle = ModelHandle()

    assert handle.state is HandleState.UNBOUND
    assert handle.is_bound is False
    assert handle.model_name is None


def test_bind_once():
    handle = ModelHandle()
    handle.bind("gemini-a")

    assert handle.state is HandleState.BOUND
    assert handle.model_name == "gemini-a"


def test_rebind_is_rejected():
    handle = ModelHandle()
    handle.bind("gemini-a")

    with pytest.raises(RuntimeError):
        handle.bind("gemini-b")

    assert handle.model_name == "gemini-a"
