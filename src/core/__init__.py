"""Core business logic and protocols.

This module contains the platform-agnostic meme flow: templates, captions,
correlation tokens, reply shapes and the interaction router, plus the
logging, error and configuration plumbing they share.
"""

from src.core.captions import captions_from_fields, default_captions
from src.core.config import (
    AutocompleteMatch,
    BotSettings,
    Presentation,
    ReplyVisibility,
    ResponsePolicy,
)
from src.core.errors import (
    ConfigurationError,
    ErrorCategory,
    InvariantViolation,
    MemeBotError,
    PreconditionError,
    ProviderError,
    SchemaError,
    classify_error,
)
from src.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)
from src.core.providers import MemeProvider, MemeResult
from src.core.router import (
    AutocompleteRequested,
    ButtonPressed,
    DialogSubmitted,
    MemeRouter,
    TemplateSelected,
)
from src.core.templates import CatalogSnapshot, MemeTemplate, match_templates
from src.core.tokens import CorrelationToken, FlowKind

__all__ = [
    # Captions
    "captions_from_fields",
    "default_captions",
    # Configuration
    "AutocompleteMatch",
    "BotSettings",
    "Presentation",
    "ReplyVisibility",
    "ResponsePolicy",
    # Error handling
    "ConfigurationError",
    "ErrorCategory",
    "InvariantViolation",
    "MemeBotError",
    "PreconditionError",
    "ProviderError",
    "SchemaError",
    "classify_error",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
    # Providers
    "MemeProvider",
    "MemeResult",
    # Router
    "AutocompleteRequested",
    "ButtonPressed",
    "DialogSubmitted",
    "MemeRouter",
    "TemplateSelected",
    # Templates and tokens
    "CatalogSnapshot",
    "CorrelationToken",
    "FlowKind",
    "MemeTemplate",
    "match_templates",
]
