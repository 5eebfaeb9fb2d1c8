"""
Handlers package - all interaction handlers.
"""

from handlers.ctf import (
    handle_ping,
    handle_ctf,
    handle_ctf_join_button,
    create_ctf,
    join_ctf,
    CTFCreateError,
)

__all__ = [
    'handle_ping',
    'handle_ctf',
    'handle_ctf_join_button',
    'create_ctf',
    'join_ctf',
    'CTFCreateError',
]
