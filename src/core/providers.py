"""Meme provider protocol.

This module defines the interface the meme flow uses to reach a meme
generation backend. The Imgflip implementation lives in
src/providers/imgflip_provider.py; tests use tests/mocks/providers.py.
All types are platform-agnostic (no Discord types).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from src.core.templates import MemeTemplate

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class MemeResult:
    """A rendered meme.

    Attributes:
        url: Direct URL of the captioned image.
        page_url: URL of the provider's page for the meme, if it sent one.
    """

    url: str
    page_url: str | None = None


# =============================================================================
# Protocols
# =============================================================================


class MemeProvider(Protocol):
    """Protocol for meme catalog and captioning backends.

    Implementations hold their own credentials. They keep no state between
    calls: every get_templates() call is a fresh fetch.
    """

    async def get_templates(self) -> list[MemeTemplate]:
        """Fetch the current template catalog.

        Returns:
            Templates in the provider's order.

        Raises:
            SchemaError: If the catalog response fails validation.
            ProviderError: If the provider cannot be reached.
        """
        ...

    async def get_template_by_id(self, template_id: str) -> MemeTemplate | None:
        """Fetch the catalog and return the template with this id.

        Returns:
            The template, or None when the catalog has no such id.
        """
        ...

    async def create_meme(
        self, template_id: str, captions: Sequence[str]
    ) -> MemeResult:
        """Caption a template.

        Args:
            template_id: Catalog id of the template.
            captions: One string per caption box, in box order. Must not be
                empty.

        Returns:
            The rendered meme.

        Raises:
            PreconditionError: If captions is empty.
            SchemaError: If the provider reports failure or the payload is
                malformed.
            ProviderError: If the provider cannot be reached.
        """
        ...
