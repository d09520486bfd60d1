"""
FastAPI dependency injection for the phishing relay.

The RelayState built by the application factory is the single owner of
the settings, upstream client and model handle; handlers get it from
`app.state.relay` rather than from module globals.
"""

from fastapi import Depends, Request

from phish_relay.config import Settings
from phish_relay.relay.classifier import PhishingClassifier
from phish_relay.relay.state import RelayState


def get_relay_state(request: Request) -> RelayState:
    """
    Get the relay state attached to the running app.

    Returns:
        RelayState instance created at startup
    """
    return request.app.state.relay


def get_settings(state: RelayState = Depends(get_relay_state)) -> Settings:
    """Settings the app was created with."""
    return state.settings


def get_classifier(state: RelayState = Depends(get_relay_state)) -> PhishingClassifier:
    """
    Create a classifier bound to the relay state.

    Not cached: the classifier is lightweight and holds no per-request data.
    """
    return PhishingClassifier(state)
