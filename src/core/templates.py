"""Meme template model and catalog lookups - platform agnostic."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.config import AutocompleteMatch

if TYPE_CHECKING:
    from src.core.providers import MemeProvider

# Discord rejects autocomplete responses with more choices than this
MAX_SUGGESTIONS = 25


@dataclass(frozen=True)
class MemeTemplate:
    """A captionable image layout from the meme catalog.

    Attributes:
        id: Catalog-assigned identifier, unique within the catalog.
        name: Human readable name, used for command input and suggestions.
        url: URL of the blank template image.
        width: Image width in pixels.
        height: Image height in pixels.
        box_count: Number of caption boxes on the template.
    """

    id: str
    name: str
    url: str
    width: int
    height: int
    box_count: int


def find_by_name(templates: Sequence[MemeTemplate], name: str) -> MemeTemplate | None:
    """Exact, case-sensitive match on the template name."""
    return next((t for t in templates if t.name == name), None)


def find_by_id(templates: Sequence[MemeTemplate], template_id: str) -> MemeTemplate | None:
    return next((t for t in templates if t.id == template_id), None)


def match_templates(
    templates: Sequence[MemeTemplate],
    query: str,
    policy: AutocompleteMatch = AutocompleteMatch.SUBSTRING,
    limit: int = MAX_SUGGESTIONS,
) -> list[MemeTemplate]:
    """Filter templates for autocomplete, keeping catalog order.

    The query is trimmed and compared case-insensitively. An empty query
    matches everything, so the first page of the catalog is suggested before
    the user has typed anything.

    Args:
        templates: Catalog in the order the provider returned it.
        query: Partial text the user has typed.
        policy: Substring or prefix matching.
        limit: Maximum number of templates to return.

    Returns:
        At most ``limit`` matching templates.
    """
    needle = query.strip().lower()
    if policy is AutocompleteMatch.PREFIX:
        matches = [t for t in templates if t.name.lower().startswith(needle)]
    else:
        matches = [t for t in templates if needle in t.name.lower()]
    return matches[:limit]


class CatalogSnapshot:
    """Catalog view that fetches at most once.

    One snapshot is created per handled interaction so that every lookup made
    while handling that interaction sees the same catalog. Snapshots are
    never shared between interactions.
    """

    def __init__(self, provider: "MemeProvider") -> None:
        self._provider = provider
        self._templates: list[MemeTemplate] | None = None

    async def templates(self) -> list[MemeTemplate]:
        if self._templates is None:
            self._templates = await self._provider.get_templates()
        return self._templates

    async def by_name(self, name: str) -> MemeTemplate | None:
        return find_by_name(await self.templates(), name)

    async def by_id(self, template_id: str) -> MemeTemplate | None:
        return find_by_id(await self.templates(), template_id)
