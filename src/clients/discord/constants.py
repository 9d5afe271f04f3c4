"""Shared constants for Discord client components."""

# Slash command schema
MEME_COMMAND_NAME = "meme"
MEME_COMMAND_DESCRIPTION = "Create a meme"
TEMPLATE_OPTION_DESCRIPTION = "Name of meme template to use"

# Embed colors (Discord color values)
EMBED_COLOR_INFO = 0x3498DB

# How long a sent button view stays in discord.py's view store (seconds).
# Buttons keep working after this: clicks are routed by custom id.
USER_INTERACTION_TIMEOUT = 300.0  # 5 minutes
