import os

# Fixed ids before config is imported (load_dotenv never overrides them)
os.environ["SERVER_ID"] = "1000"
os.environ["CTF_CATEGORY_ID"] = "801259574317416479"
os.environ.pop("REPLY_TO_UNKNOWN_INTERACTIONS", None)

from dotenv import load_dotenv
load_dotenv()

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

GUILD_ID = 1000


def make_role(role_id, name):
    role = MagicMock()
    role.id = role_id
    role.name = name
    role.edit = AsyncMock()
    role.delete = AsyncMock()
    return role


def make_http_error(text="boom", status=500, cls=discord.HTTPException):
    response = MagicMock()
    response.status = status
    response.reason = "Error"
    return cls(response, text)


@pytest.fixture
def everyone():
    return make_role(GUILD_ID, "@everyone")


@pytest.fixture
def new_role():
    """Role returned by create_role, before it is renamed."""
    return make_role(2001, "new role")


@pytest.fixture
def guild(everyone, new_role):
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.roles = [everyone, make_role(2000, "Moderators")]
    guild.default_role = everyone
    guild.create_role = AsyncMock(return_value=new_role)
    channel = MagicMock()
    channel.id = 3001
    guild.create_text_channel = AsyncMock(return_value=channel)
    return guild


@pytest.fixture
def member():
    member = MagicMock()
    member.id = 4001
    member.name = "alice"
    member.add_roles = AsyncMock()
    return member


@pytest.fixture
def make_interaction(guild, member):
    """Build a fake interaction delivered from the test guild."""

    def _make(type=discord.InteractionType.application_command, data=None, message_content=None):
        interaction = MagicMock()
        interaction.id = 9001
        interaction.type = type
        interaction.data = data or {}
        interaction.guild_id = GUILD_ID
        interaction.user = member
        interaction.client.fetch_guild = AsyncMock(return_value=guild)
        interaction.response.send_message = AsyncMock()
        interaction.response.is_done = MagicMock(return_value=False)
        if message_content is None:
            interaction.message = None
        else:
            interaction.message = MagicMock()
            interaction.message.content = message_content
        return interaction

    return _make


def ctf_data(subcommand, **options):
    """Interaction data for /ctf <subcommand> [options]."""
    sub = {"name": subcommand, "type": 1}
    if options:
        sub["options"] = [
            {"name": name.replace("_", "-"), "type": 3, "value": value}
            for name, value in options.items()
        ]
    return {"name": "ctf", "type": 1, "options": [sub]}
