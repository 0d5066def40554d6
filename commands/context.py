"""
Invocation Context
Who invoked a command, where, and the collaborators a command runs against
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from utils.discord import DiscordUtils

# Outermost settings scope, below channel and guild
GLOBAL_SCOPE = "global"


class ScopeKind(Enum):
    """Where an invocation happened."""

    DIRECT = "direct"
    GROUP = "group"


@dataclass
class InvocationContext:
    """A single piece of user input the command system may react to."""

    content: str
    invoker_id: str
    invoker_name: str
    channel_id: str
    guild_id: Optional[str] = None
    channel: Any = None
    message: Any = None
    # Required settings resolved for the command being invoked
    settings: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_message(cls, message: Any) -> "InvocationContext":
        """
        Build a context from a discord.py message.

        Args:
            message: Discord message object

        Returns:
            InvocationContext for the message
        """
        guild = message.guild
        return cls(
            content=message.content,
            invoker_id=str(message.author.id),
            invoker_name=getattr(message.author, "display_name", None) or message.author.name,
            channel_id=str(message.channel.id),
            guild_id=str(guild.id) if guild else None,
            channel=message.channel,
            message=message,
        )

    @property
    def scope_kind(self) -> ScopeKind:
        return ScopeKind.GROUP if self.guild_id else ScopeKind.DIRECT

    @property
    def is_in_server(self) -> bool:
        return self.scope_kind is ScopeKind.GROUP

    @property
    def settings_scope(self) -> Tuple[str, ...]:
        """Scope IDs to resolve settings against, most specific first."""
        if self.guild_id:
            return (self.channel_id, self.guild_id, GLOBAL_SCOPE)
        return (self.channel_id, GLOBAL_SCOPE)

    def describe_location(self) -> str:
        if self.message is not None:
            return DiscordUtils.describe_channel(self.message.channel, self.message.guild)
        if self.guild_id:
            return f"{self.guild_id} >> #{self.channel_id}"
        return "DM"


@dataclass
class CommandEnvironment:
    """
    External collaborators a command is gated and run against.

    Attributes:
        config: Bot configuration (error messages, separator, admin role)
        settings: Resolves and stores scoped boolean settings
        identity: Answers bot admin and server admin questions
        messenger: Sends replies back to the invocation's channel
        bans: Ban storage, used by the ban built-ins
    """

    config: Any
    settings: Any
    identity: Any
    messenger: Any
    bans: Any = None
