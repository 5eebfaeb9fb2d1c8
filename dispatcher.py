"""
Routes incoming interactions to their handlers.

Two tables are looked up by string: slash commands by top-level command
name, message components (buttons) by their custom id. Anything else is
reported instead of being dropped silently.
"""

import logging
from types import MappingProxyType

import discord

from config import CTF_JOIN_CUSTOM_ID
from handlers import handle_ctf, handle_ctf_join_button, handle_ping
from utils import send_response

logger = logging.getLogger(__name__)

COMMAND = "command"
COMPONENT = "component"

UNSUPPORTED_MESSAGE = "This interaction is not supported."
FAILURE_MESSAGE = "Something went wrong while handling this interaction."


class Dispatcher:
    """Look up and run the handler for an interaction."""

    def __init__(self, command_handlers, component_handlers, reply_to_unknown=False):
        self.command_handlers = MappingProxyType(dict(command_handlers))
        self.component_handlers = MappingProxyType(dict(component_handlers))
        self.reply_to_unknown = reply_to_unknown

    def resolve(self, interaction):
        """Return (kind, key, handler); handler is None when nothing matches."""
        data = interaction.data or {}
        if interaction.type == discord.InteractionType.application_command:
            key = data.get("name")
            return COMMAND, key, self.command_handlers.get(key)
        if interaction.type == discord.InteractionType.component:
            key = data.get("custom_id")
            return COMPONENT, key, self.component_handlers.get(key)
        return None, None, None

    async def dispatch(self, interaction):
        """Run the matching handler. Returns False when nothing handled it."""
        kind, key, handler = self.resolve(interaction)

        if kind is None:
            logger.debug("Ignoring interaction %s of type %s", interaction.id, interaction.type)
            return False

        if handler is None:
            logger.warning("No handler for %s %r (interaction %s)", kind, key, interaction.id)
            if self.reply_to_unknown:
                await send_response(interaction, UNSUPPORTED_MESSAGE, ephemeral=True)
            return False

        try:
            await handler(interaction)
        except Exception:
            logger.exception("Handler for %s %r failed", kind, key)
            if not interaction.response.is_done():
                await send_response(interaction, FAILURE_MESSAGE, ephemeral=True)
        return True


def build_dispatcher(reply_to_unknown=False):
    """Dispatcher wired with the bot's commands and buttons."""
    return Dispatcher(
        command_handlers={
            "ping": handle_ping,
            "ctf": handle_ctf,
        },
        component_handlers={
            CTF_JOIN_CUSTOM_ID: handle_ctf_join_button,
        },
        reply_to_unknown=reply_to_unknown,
    )
