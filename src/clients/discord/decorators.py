"""Discord interaction handler decorators."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

import discord

from src.clients.discord.utils import report_interaction_error
from src.core.logging import bind_contextvars, clear_contextvars, get_logger

structured_logger = get_logger(__name__)

T = TypeVar("T")

# Type alias for async interaction handlers
InteractionHandler = Callable[..., Awaitable[T]]


def track_interaction(func: InteractionHandler[T]) -> InteractionHandler[T | None]:
    """Run an interaction handler as the top level of its interaction.

    Generates a correlation ID, binds it with the interaction's identity to
    the logging context, and logs start and completion. Any exception is
    handed to report_interaction_error and the handler returns None, so one
    failed interaction never propagates into discord.py's dispatch loop.
    Cancellation is logged and re-raised.
    """

    @functools.wraps(func)
    async def wrapper(interaction: discord.Interaction, *args: Any, **kwargs: Any) -> T | None:
        correlation_id = str(uuid4())[:8]

        bind_contextvars(
            correlation_id=correlation_id,
            handler=func.__name__,
            interaction_id=interaction.id,
            user_id=interaction.user.id,
            channel_id=interaction.channel_id,
        )

        try:
            structured_logger.info("interaction_started")
            result = await func(interaction, *args, **kwargs)
            structured_logger.info("interaction_completed")
            return result
        except asyncio.CancelledError:
            # CancelledError is a BaseException, not Exception
            structured_logger.info("interaction_cancelled")
            raise
        except Exception as ex:
            await report_interaction_error(interaction, ex)
            return None
        finally:
            clear_contextvars()

    return wrapper
