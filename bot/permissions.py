"""
Permissions
Answers who counts as a bot admin and who counts as a server admin
"""

from typing import Any, Iterable, Optional

from utils.discord import DiscordUtils


class DiscordIdentity:
    """
    Identity checks backed by configuration and Discord member permissions.

    Bot admins are listed by ID in configuration. Server admins are members
    who can manage the guild, or who hold the configured admin role.
    Being a bot admin does not make someone a server admin.
    """

    def __init__(self, bot_admin_ids: Iterable[str] = (), server_admin_role_name: Optional[str] = None):
        self.bot_admin_ids = frozenset(str(admin_id) for admin_id in bot_admin_ids)
        self.server_admin_role_name = server_admin_role_name or None

    def is_bot_admin(self, invoker_id: str) -> bool:
        return str(invoker_id) in self.bot_admin_ids

    def is_scope_admin(self, context: Any) -> bool:
        """
        Check whether the invoker administers the server the input came from.

        Args:
            context: InvocationContext holding the raw Discord message

        Returns:
            False outside of a server or without a message to inspect
        """
        if not context.is_in_server or context.message is None:
            return False
        return DiscordUtils.is_server_admin(context.message, self.server_admin_role_name)
