"""
Unit tests for API dependency injection.
"""

from types import SimpleNamespace

from phish_relay.api.dependencies import get_classifier, get_relay_state, get_settings
from phish_relay.relay.classifier import PhishingClassifier
from phish_relay.relay.state import RelayState


def _fake_request(state: RelayState):
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(relay=state)))


def test_get_relay_state_reads_app_state(test_settings, mock_llm_client):
    state = RelayState.from_settings(test_settings, llm_client=mock_llm_client)

    assert get_relay_state(_fake_request(state)) is state


def test_get_settings(test_settings, mock_llm_client):
    state = RelayState.from_settings(test_settings, llm_client=mock_llm_client)

    assert get_settings(state) is test_settings


def test_get_classifier_is_not_cached(test_settings, mock_llm_client):
    state = RelayState.from_settings(test_settings, llm_client=mock_llm_client)

    classifier1 = get_classifier(state)
    classifier2 = get_classifier(state)

    assert isinstance(classifier1, PhishingClassifier)
    assert classifier1 is not classifier2
    # Both share the same state
    assert classifier1.state is classifier2.state is state
