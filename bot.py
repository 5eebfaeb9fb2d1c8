"""
CTF Group Discord Bot
=====================
Main entry point for the Discord bot.

Registers /ping and /ctf (create, join) in the configured server and
answers them, together with the 'Join <ctf>' button, through the
dispatcher.
"""

import logging

import discord

from config import (
    DISCORD_TOKEN,
    SERVER_ID,
    REPLY_TO_UNKNOWN_INTERACTIONS,
    LOG_LEVEL,
)
from dispatcher import build_dispatcher
from registry import build_command_tree, register_commands

logger = logging.getLogger(__name__)

# Delivered to the command tree, which forwards them to the dispatcher
TREE_INTERACTIONS = (
    discord.InteractionType.application_command,
    discord.InteractionType.autocomplete,
)


# =============================================================================
# BOT SETUP
# =============================================================================

intents = discord.Intents.default()
intents.guilds = True

bot = discord.Client(intents=intents)
dispatcher = build_dispatcher(reply_to_unknown=REPLY_TO_UNKNOWN_INTERACTIONS)
tree = build_command_tree(bot, dispatcher)

_commands_registered = False


# =============================================================================
# EVENT HANDLERS
# =============================================================================

@bot.event
async def on_ready():
    """Bot startup event."""
    global _commands_registered
    logger.info("Logged in as %s", bot.user)

    # on_ready fires again after every reconnect
    if _commands_registered:
        return
    if not SERVER_ID:
        logger.error("SERVER_ID is not set, slash commands were not registered")
        return
    try:
        await register_commands(tree, SERVER_ID)
        _commands_registered = True
    except discord.HTTPException:
        logger.exception("Failed to register slash commands")


@bot.event
async def on_interaction(interaction):
    """Button clicks and other non-command interactions go to the dispatcher."""
    if interaction.type in TREE_INTERACTIONS:
        return
    await dispatcher.dispatch(interaction)


# =============================================================================
# RUN BOT
# =============================================================================

def main():
    bot.run(
        DISCORD_TOKEN,
        log_level=getattr(logging, LOG_LEVEL, logging.INFO),
        root_logger=True,
    )


if __name__ == "__main__":
    main()
