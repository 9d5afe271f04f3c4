"""Mock implementations for testing."""

from tests.mocks.interactions import (
    button_interaction,
    create_mock_interaction,
    create_mock_user,
    modal_interaction,
)
from tests.mocks.providers import DEFAULT_CATALOG, MockMemeProvider, make_template

__all__ = [
    "DEFAULT_CATALOG",
    "MockMemeProvider",
    "button_interaction",
    "create_mock_interaction",
    "create_mock_user",
    "make_template",
    "modal_interaction",
]
