"""Imgflip meme provider implementation.

This module implements the MemeProvider protocol against the public Imgflip
API: the template catalog (get_memes) and captioning (caption_image).
Responses are validated with pydantic before anything is returned, so callers
only ever see well-formed templates and meme URLs.

API reference: https://imgflip.com/api
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

import aiohttp
from pydantic import BaseModel, ConfigDict, ValidationError

from src.core.errors import PreconditionError, ProviderError, SchemaError
from src.core.logging import get_logger
from src.core.providers import MemeResult
from src.core.templates import MemeTemplate, find_by_id

logger = get_logger(__name__)

IMGFLIP_API_BASE = "https://api.imgflip.com"
GET_MEMES_URL = f"{IMGFLIP_API_BASE}/get_memes"
CAPTION_IMAGE_URL = f"{IMGFLIP_API_BASE}/caption_image"

DEFAULT_TIMEOUT_SECONDS = 30


# =============================================================================
# Response schemas
# =============================================================================


class ImgflipModel(BaseModel):
    """Base for Imgflip payloads; types must match exactly, no coercion."""

    model_config = ConfigDict(strict=True)


class ImgflipTemplate(ImgflipModel):
    """One entry of get_memes data.memes."""

    id: str
    name: str
    url: str
    width: int
    height: int
    box_count: int

    def to_template(self) -> MemeTemplate:
        return MemeTemplate(
            id=self.id,
            name=self.name,
            url=self.url,
            width=self.width,
            height=self.height,
            box_count=self.box_count,
        )


class GetMemesData(ImgflipModel):
    memes: list[ImgflipTemplate]


class GetMemesResponse(ImgflipModel):
    """Successful get_memes envelope."""

    success: Literal[True]
    data: GetMemesData


class CaptionImageData(ImgflipModel):
    url: str
    page_url: str | None = None


class CaptionImageResponse(ImgflipModel):
    """Successful caption_image envelope."""

    success: Literal[True]
    data: CaptionImageData


# =============================================================================
# Provider
# =============================================================================


class ImgflipProvider:
    """Imgflip implementation of the MemeProvider protocol.

    A session is opened per request; the provider itself only holds the
    account credentials and request timeout, so one instance can serve any
    number of concurrent interactions.

    Example:
        provider = ImgflipProvider(username="bot", password="secret")
        templates = await provider.get_templates()
        result = await provider.create_meme(templates[0].id, ["top", "bottom"])
    """

    def __init__(
        self,
        username: str,
        password: str,
        timeout: aiohttp.ClientTimeout | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            username: Imgflip account name used for captioning.
            password: Imgflip account password.
            timeout: Per-request timeout. Defaults to 30 seconds total.
        """
        self._username = username
        self._password = password
        self._timeout = timeout or aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT_SECONDS)

    @property
    def has_credentials(self) -> bool:
        return bool(self._username and self._password)

    async def get_templates(self) -> list[MemeTemplate]:
        """Fetch the Imgflip template catalog.

        Returns:
            Templates in the order Imgflip lists them (most popular first).

        Raises:
            SchemaError: If the response is not a valid success payload.
            ProviderError: If the request fails at the transport level.
        """
        payload = await self._request("GET", GET_MEMES_URL)
        response = _validate(GetMemesResponse, payload, GET_MEMES_URL)
        templates = [meme.to_template() for meme in response.data.memes]
        logger.debug("imgflip_templates_fetched", count=len(templates))
        return templates

    async def get_template_by_id(self, template_id: str) -> MemeTemplate | None:
        """Return the catalog template with this id, or None if absent."""
        return find_by_id(await self.get_templates(), template_id)

    async def create_meme(
        self, template_id: str, captions: Sequence[str]
    ) -> MemeResult:
        """Caption a template through caption_image.

        Args:
            template_id: Imgflip template id.
            captions: Box texts in box order; sent as boxes[i][text].

        Returns:
            The rendered meme.

        Raises:
            PreconditionError: If captions is empty. Raised before any request.
            SchemaError: If Imgflip reports failure or the payload is malformed.
            ProviderError: If the request fails at the transport level.
        """
        if not captions:
            raise PreconditionError("create_meme requires at least one caption")

        form: dict[str, str] = {
            "template_id": template_id,
            "username": self._username,
            "password": self._password,
        }
        for i, text in enumerate(captions):
            form[f"boxes[{i}][text]"] = text

        payload = await self._request("POST", CAPTION_IMAGE_URL, data=form)
        response = _validate(CaptionImageResponse, payload, CAPTION_IMAGE_URL)

        logger.info(
            "imgflip_meme_created",
            template_id=template_id,
            boxes=len(captions),
            url=response.data.url,
        )
        return MemeResult(url=response.data.url, page_url=response.data.page_url)

    async def _request(
        self, method: str, url: str, data: dict[str, str] | None = None
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.request(method, url, data=data) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            "imgflip_request_failed",
                            url=url,
                            status=response.status,
                            body=error_text[:200],
                        )
                        raise ProviderError(
                            f"Imgflip request failed with status {response.status}",
                            endpoint=url,
                        )
                    # Imgflip does not always label its JSON as application/json
                    return await response.json(content_type=None)
        except aiohttp.ClientError as ex:
            logger.error("imgflip_network_error", url=url, error=str(ex))
            raise ProviderError(f"Network error during Imgflip request: {ex}", endpoint=url) from ex
        except TimeoutError as ex:
            logger.error("imgflip_timeout", url=url, timeout=self._timeout.total)
            raise ProviderError("Imgflip request timed out", endpoint=url) from ex
        except ValueError as ex:
            logger.error("imgflip_invalid_json", url=url, error=str(ex))
            raise SchemaError(f"Imgflip returned a non-JSON body: {ex}", endpoint=url) from ex


def _validate(model: type[BaseModel], payload: Any, url: str) -> Any:
    """Validate a decoded payload, converting every failure to SchemaError."""
    if isinstance(payload, dict) and payload.get("success") is False:
        error_message = payload.get("error_message")
        logger.error("imgflip_reported_failure", url=url, error_message=error_message)
        raise SchemaError(
            f"Imgflip reported failure: {error_message or 'no error message'}",
            endpoint=url,
            error_message=error_message,
        )

    try:
        return model.model_validate(payload)
    except ValidationError as ex:
        logger.error("imgflip_schema_mismatch", url=url, errors=ex.error_count())
        raise SchemaError(f"Unexpected Imgflip response: {ex}", endpoint=url) from ex
