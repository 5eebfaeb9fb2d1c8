"""
Slash command surface of the bot, synced once at startup.

The command tree only declares the commands and hands every invocation to
the dispatcher; routing and handling live there.
"""

import logging

import discord
from discord import app_commands

logger = logging.getLogger(__name__)


# =============================================================================
# COMMAND DEFINITIONS
# =============================================================================

class CTF(app_commands.Group):
    """Parent command for the CTF group."""

    def __init__(self, dispatcher):
        super().__init__(name="ctf", description="Parent command for the CTF group")
        self.dispatcher = dispatcher

    @app_commands.command(description="Create a CTF")
    @app_commands.rename(ctf_name="ctf-name")
    @app_commands.describe(ctf_name="CTF name")
    async def create(self, interaction: discord.Interaction, ctf_name: str):
        """Slash command: /ctf create <ctf-name>"""
        await self.dispatcher.dispatch(interaction)

    @app_commands.command(description="Join a CTF")
    async def join(self, interaction: discord.Interaction):
        """Slash command: /ctf join"""
        await self.dispatcher.dispatch(interaction)


def ping_command(dispatcher):
    """Build /ping."""

    async def ping(interaction: discord.Interaction):
        await dispatcher.dispatch(interaction)

    return app_commands.Command(name="ping", description="ping-command", callback=ping)


def build_command_tree(client, dispatcher):
    """Attach the command tree to a client, in registration order."""
    tree = app_commands.CommandTree(client)
    tree.add_command(ping_command(dispatcher))
    tree.add_command(CTF(dispatcher))

    @tree.error
    async def on_app_command_error(interaction, error):
        # Commands Discord still knows about but we don't declare
        if isinstance(error, app_commands.CommandNotFound):
            await dispatcher.dispatch(interaction)
            return
        logger.error("Command tree error for interaction %s", interaction.id, exc_info=error)

    return tree


def command_names(tree):
    """Top-level command names, in registration order."""
    return [command.name for command in tree.get_commands()]


# =============================================================================
# REGISTRATION
# =============================================================================

async def register_commands(tree, guild_id):
    """Overwrite the guild's slash commands with ours."""
    guild = discord.Object(id=guild_id)
    # Guild commands show up instantly, global sync can take up to an hour
    tree.copy_global_to(guild=guild)
    try:
        synced = await tree.sync(guild=guild)
    except discord.HTTPException as e:
        logger.error("Failed to register commands in guild %s: %s", guild_id, e)
        raise
    logger.info("Registered %d slash command(s) in guild %s", len(synced), guild_id)
    return synced
