"""Shared pytest fixtures for meme bot tests."""

import pytest

from src.core.config import ResponsePolicy
from src.core.router import MemeRouter
from src.core.templates import MemeTemplate
from tests.mocks.providers import MockMemeProvider, make_template


@pytest.fixture
def drake_template() -> MemeTemplate:
    """The two-box Drake template used across flow tests."""
    return make_template("181913649", "Drake Hotline Bling", 2)


@pytest.fixture
def mock_meme_provider() -> MockMemeProvider:
    """Provide a mock meme provider serving the default catalog.

    Returns:
        MockMemeProvider: A provider with five templates and no recorded calls.

    Example:
        async def test_lookup(mock_meme_provider):
            templates = await mock_meme_provider.get_templates()
            assert templates[0].name == "Drake Hotline Bling"
    """
    return MockMemeProvider()


@pytest.fixture
def router(mock_meme_provider: MockMemeProvider) -> MemeRouter:
    """Provide a router with the default response policy."""
    return MemeRouter(mock_meme_provider, ResponsePolicy())
