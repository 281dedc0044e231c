"""Shared test fixtures and configuration."""
import pytest

from rssbuilder.escape import EscapeCache


@pytest.fixture
def cache():
    """A fresh escape cache so tests don't see each other's entries."""
    return EscapeCache()


@pytest.fixture
def channel_dict():
    return {
        "title": "T",
        "description": "D",
        "site": "https://s",
        "feedUrl": "https://s/f.xml",
        "items": [],
    }
