"""Error types and classification for the meme bot.

Failures fall into a few groups:

- ProviderError / SchemaError: Imgflip could not be reached, or answered with
  something other than a success payload. Never retried.
- PreconditionError: a caller broke a contract (no captions, a template with
  no caption boxes). Fatal to the current interaction only.
- InvariantViolation: state that correct token construction makes
  unreachable, such as a token naming a template that is not in the catalog.
- ConfigurationError: the process was started without required settings.

classify_error() maps any exception onto an ErrorCategory for logging.

Example:
    try:
        result = await provider.create_meme(template_id, captions)
    except Exception as ex:
        logger.error("meme_failed", category=classify_error(ex).name)
        raise
"""

import asyncio
from enum import Enum, auto

import aiohttp
import discord


class ErrorCategory(Enum):
    """Classification of failures for log output."""

    SCHEMA = auto()  # Imgflip returned failure or malformed payload
    PROVIDER = auto()  # Imgflip call failed before a payload arrived
    NETWORK = auto()  # Connection-level failure
    TIMEOUT = auto()  # Request/operation timeout
    PRECONDITION = auto()  # Caller broke a contract
    INVARIANT = auto()  # "Cannot happen" state was reached
    INTERACTION_EXPIRED = auto()  # Discord no longer accepts a response
    CONFIGURATION = auto()  # Missing or invalid settings
    UNKNOWN = auto()  # Unclassified error


class MemeBotError(Exception):
    """Base class for errors raised by this application."""


class ProviderError(MemeBotError):
    """The meme provider could not complete a request.

    Attributes:
        endpoint: The API endpoint that failed, if known.
    """

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class SchemaError(ProviderError):
    """The provider answered, but not with a valid success payload.

    Attributes:
        endpoint: The API endpoint that returned the payload.
        error_message: The provider's own error text, when it sent one.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        error_message: str | None = None,
    ) -> None:
        super().__init__(message, endpoint=endpoint)
        self.error_message = error_message


class PreconditionError(MemeBotError):
    """A caller violated a documented precondition."""


class InvariantViolation(MemeBotError):
    """An internal invariant did not hold."""


class ConfigurationError(MemeBotError):
    """Required configuration is missing or invalid."""


def classify_error(error: BaseException) -> ErrorCategory:
    """Classify an exception into an error category.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory that best matches the error.
    """
    # SchemaError before ProviderError: it is the more specific type
    if isinstance(error, SchemaError):
        return ErrorCategory.SCHEMA
    if isinstance(error, ProviderError):
        return ErrorCategory.PROVIDER
    if isinstance(error, PreconditionError):
        return ErrorCategory.PRECONDITION
    if isinstance(error, InvariantViolation):
        return ErrorCategory.INVARIANT
    if isinstance(error, ConfigurationError):
        return ErrorCategory.CONFIGURATION

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.TIMEOUT
    if isinstance(error, aiohttp.ClientError):
        return ErrorCategory.NETWORK

    # 10062 Unknown interaction: the 3 second response window has passed
    if isinstance(error, discord.NotFound) and error.code == 10062:
        return ErrorCategory.INTERACTION_EXPIRED
    if isinstance(error, discord.InteractionResponded):
        return ErrorCategory.INTERACTION_EXPIRED

    return ErrorCategory.UNKNOWN
