"""
Utility functions shared by the interaction handlers.
"""

import logging

import discord

from config import CTF_JOIN_CUSTOM_ID

logger = logging.getLogger(__name__)


def error_reason(exc):
    """Render an exception as the reason shown to the user."""
    if isinstance(exc, discord.HTTPException):
        return exc.text or str(exc)
    return str(exc)


def build_join_view(ctf_name):
    """Build the view holding the 'Join <ctf>' button."""
    view = discord.ui.View(timeout=None)
    view.add_item(discord.ui.Button(
        label=f"Join {ctf_name}",
        style=discord.ButtonStyle.success,
        custom_id=CTF_JOIN_CUSTOM_ID,
        disabled=False,
    ))
    # Clicks are routed by custom id; a stopped view is sent but never stored
    view.stop()
    return view


async def send_response(interaction, content, *, view=None, ephemeral=False):
    """
    Send the primary reply to an interaction.

    A failed send is only logged: once the response window is gone there is
    no way left to reach the user.
    """
    kwargs = {"ephemeral": ephemeral}
    if view is not None:
        kwargs["view"] = view
    try:
        await interaction.response.send_message(content, **kwargs)
    except discord.HTTPException as e:
        logger.error("Failed to respond to interaction %s: %s", interaction.id, e)
        return False
    return True
