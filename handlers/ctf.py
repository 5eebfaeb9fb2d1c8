"""
CTF-related handlers: create a CTF (role + locked channel) and join it.
"""

import logging

import discord

from config import CTF_CATEGORY_ID
from utils import build_join_view, error_reason, send_response

logger = logging.getLogger(__name__)


class CTFCreateError(Exception):
    """A step of the create workflow failed; the message is shown to the user."""


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def subcommand_options(data):
    """Return (subcommand name, {option name: value}) from interaction data."""
    options = (data or {}).get("options") or []
    if not options:
        return None, {}
    sub = options[0]
    values = {opt["name"]: opt.get("value") for opt in sub.get("options") or []}
    return sub.get("name"), values


async def fetch_calling_guild(interaction):
    """Fetch the guild an interaction came from, with its roles. None in DMs."""
    if interaction.guild_id is None:
        return None
    return await interaction.client.fetch_guild(interaction.guild_id)


async def delete_role_quietly(role, reason):
    """Undo a role creation; a failure here is only logged."""
    try:
        await role.delete(reason=reason)
        logger.warning("Deleted orphan role %s (%s)", role.name, reason)
    except discord.HTTPException as e:
        logger.error("Could not delete orphan role %s: %s", role.id, e)


# =============================================================================
# CTF CREATION
# =============================================================================

async def create_ctf_role(guild, ctf_name):
    """Create the role for a CTF and give it its name."""
    try:
        role = await guild.create_role(reason=f"Role for {ctf_name} CTF")
    except discord.HTTPException as e:
        raise CTFCreateError(f"Could not create new guild role: {error_reason(e)}") from e

    try:
        await role.edit(
            name=ctf_name,
            colour=discord.Colour.default(),
            hoist=True,
            permissions=discord.Permissions.none(),
            mentionable=False,
        )
    except discord.HTTPException as e:
        await delete_role_quietly(role, f"rename to {ctf_name} failed")
        raise CTFCreateError(f"Could not create new guild role: {error_reason(e)}") from e
    return role


async def create_ctf_channel(guild, role, ctf_name):
    """Create the text channel for a CTF, visible only to its role."""
    overwrites = {
        guild.default_role: discord.PermissionOverwrite(view_channel=False),
        role: discord.PermissionOverwrite(view_channel=True, send_messages=True),
    }
    try:
        return await guild.create_text_channel(
            ctf_name,
            topic=f"Channel for {ctf_name}",
            category=discord.Object(id=CTF_CATEGORY_ID),
            overwrites=overwrites,
        )
    except discord.HTTPException as e:
        await delete_role_quietly(role, f"channel for {ctf_name} could not be created")
        raise CTFCreateError(f"Could not create channel for {ctf_name}: {error_reason(e)}") from e


async def create_ctf(interaction, ctf_name):
    """
    Handle /ctf create <ctf-name>.

    Creates a role named after the CTF and a text channel only that role can
    see, then answers publicly with a join button. The message content is the
    CTF name itself, the join button reads it back later.
    """
    logger.info("New CTF name given: %s", ctf_name)
    try:
        try:
            guild = await fetch_calling_guild(interaction)
        except discord.HTTPException as e:
            raise CTFCreateError(f"Could not create new guild role: {error_reason(e)}") from e
        if guild is None:
            raise CTFCreateError("Could not create new guild role: not used inside a server")

        if discord.utils.get(guild.roles, name=ctf_name) is not None:
            raise CTFCreateError(f"CTF {ctf_name} already exists.")

        role = await create_ctf_role(guild, ctf_name)
        channel = await create_ctf_channel(guild, role, ctf_name)
    except CTFCreateError as e:
        logger.warning("CTF %s not created: %s", ctf_name, e)
        await send_response(interaction, str(e))
        return

    logger.info("Created CTF %s (role %s, channel %s)", ctf_name, role.id, channel.id)
    await send_response(interaction, ctf_name, view=build_join_view(ctf_name))


# =============================================================================
# CTF JOIN
# =============================================================================

async def join_ctf(interaction):
    """
    Add the calling member to the role of a CTF.

    The CTF name is the content of the message the interaction is attached
    to, i.e. the bot's own reply to /ctf create.
    """
    try:
        guild = await fetch_calling_guild(interaction)
    except discord.HTTPException as e:
        logger.warning("Could not fetch guild %s: %s", interaction.guild_id, e)
        guild = None
    if guild is None:
        await send_response(interaction, "Couldn't find the calling Guild", ephemeral=True)
        return

    if interaction.message is None:
        await send_response(
            interaction,
            "Use the Join button on a CTF announcement to join it.",
            ephemeral=True,
        )
        return

    ctf_name = interaction.message.content
    member = interaction.user
    logger.info("Adding user %s to CTF %s", member.name, ctf_name)

    role = discord.utils.get(guild.roles, name=ctf_name)
    if role is None:
        await send_response(
            interaction,
            f"Role {ctf_name} does not exist. Try creating it, first!",
            ephemeral=True,
        )
        return

    try:
        await member.add_roles(role, reason=f"Joined {ctf_name} CTF")
    except discord.HTTPException as e:
        await send_response(
            interaction,
            f"Could not add you to {ctf_name}: {error_reason(e)}",
            ephemeral=True,
        )
        return

    await send_response(
        interaction,
        f"Added user {member.name} to role {role.name}",
        ephemeral=True,
    )


# =============================================================================
# COMMAND HANDLERS
# =============================================================================

async def handle_ping(interaction):
    """Handle /ping."""
    await send_response(interaction, "Pong!")


async def handle_ctf(interaction):
    """Handle the /ctf command group."""
    name, values = subcommand_options(interaction.data)
    if name == "create":
        await create_ctf(interaction, values.get("ctf-name", ""))
    elif name == "join":
        await join_ctf(interaction)
    else:
        logger.warning("Unknown ctf subcommand: %r", name)
        await send_response(interaction, "Unknown ctf subcommand.", ephemeral=True)


async def handle_ctf_join_button(interaction):
    """Handle a click on the 'Join <ctf>' button."""
    await join_ctf(interaction)
