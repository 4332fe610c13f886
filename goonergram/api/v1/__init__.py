"""
API v1 router exports.
Provides API endpoint routers.
"""
from goonergram.api.v1 import (
    auth,
    profile,
    posts,
    stories,
    partners,
    chats,
    global_chat,
    notifications,
)

__all__ = [
    "auth",
    "profile",
    "posts",
    "stories",
    "partners",
    "chats",
    "global_chat",
    "notifications",
]
