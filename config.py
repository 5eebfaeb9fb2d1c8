"""
Configuration settings for the CTF group bot.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# DISCORD SETTINGS
# =============================================================================

DISCORD_TOKEN = os.getenv("DISCORD_BOT_TOKEN")
SERVER_ID = int(os.getenv("SERVER_ID") or 0)

# Category every CTF text channel is filed under
CTF_CATEGORY_ID = int(os.getenv("CTF_CATEGORY_ID") or 801259574317416479)


# =============================================================================
# INTERACTIONS
# =============================================================================

CTF_JOIN_CUSTOM_ID = "ctf_join"

# Answer interactions nobody handles with a generic ephemeral message
REPLY_TO_UNKNOWN_INTERACTIONS = _env_flag("REPLY_TO_UNKNOWN_INTERACTIONS")


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
