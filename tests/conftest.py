"""
Shared fixtures: in-memory stand-ins for the collaborators commands run against.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from bot.config import Config
from commands.context import CommandEnvironment, InvocationContext

GUILD_ID = "100"
CHANNEL_ID = "10"
OTHER_CHANNEL_ID = "11"
USER_ID = "1"
ADMIN_ID = "2"
BOT_ADMIN_ID = "3"


class FakeSettings:
    """Scoped boolean settings held in a dict keyed by (scope_id, name)."""

    def __init__(self, values: Optional[Dict[Tuple[str, str], bool]] = None):
        self.values: Dict[Tuple[str, str], bool] = dict(values or {})
        self.lookups: List[Tuple[Tuple[str, ...], Tuple[str, ...]]] = []

    def _resolve(self, scope: Sequence[str], name: str, default: bool) -> bool:
        for scope_id in scope:
            if (scope_id, name) in self.values:
                return self.values[(scope_id, name)]
        return default

    async def resolve_boolean(self, scope, name, default):
        self.lookups.append((tuple(scope), (name,)))
        return self._resolve(scope, name, default)

    async def resolve_many(self, scope, names, default):
        self.lookups.append((tuple(scope), tuple(names)))
        return {name: self._resolve(scope, name, default) for name in names}

    async def set_boolean(self, scope_id, name, value):
        self.values[(scope_id, name)] = value

    async def clear(self, scope_id, names: Iterable[str]):
        removed = 0
        for name in names:
            if self.values.pop((scope_id, name), None) is not None:
                removed += 1
        return removed


class FakeIdentity:
    def __init__(self, bot_admins=(BOT_ADMIN_ID,), scope_admins=(ADMIN_ID,), server_admin_role_name="Bot Admin"):
        self.bot_admins = set(bot_admins)
        self.scope_admins = set(scope_admins)
        self.server_admin_role_name = server_admin_role_name

    def is_bot_admin(self, invoker_id):
        return invoker_id in self.bot_admins

    def is_scope_admin(self, context):
        return context.invoker_id in self.scope_admins


class FakeMessenger:
    """Records sent messages as (text, deleted_automatically) pairs."""

    def __init__(self, error: Optional[BaseException] = None):
        self.sent: List[Tuple[str, bool]] = []
        self.error = error

    @property
    def texts(self) -> List[str]:
        return [text for text, _ in self.sent]

    async def send(self, context, text):
        if self.error is not None:
            raise self.error
        self.sent.append((text, False))

    async def send_and_delete(self, context, text):
        if self.error is not None:
            raise self.error
        self.sent.append((text, True))


class FakeBans:
    def __init__(self):
        self.banned = set()

    async def ban(self, target_type, target_id):
        self.banned.add((target_type, target_id))

    async def unban(self, target_type, target_id):
        if (target_type, target_id) in self.banned:
            self.banned.remove((target_type, target_id))
            return True
        return False

    async def is_banned(self, user_id, guild_id=None):
        return ("user", user_id) in self.banned or ("server", guild_id) in self.banned


class RecordingActivityLogger:
    def __init__(self):
        self.reactions = []
        self.failures = []

    def log_input_reaction(self, title, context, success, description=""):
        self.reactions.append((title, context.content, success, description))

    def log_failure(self, title, message, error=None):
        self.failures.append((title, message, error))


@pytest.fixture
def config():
    return Config(
        GENERIC_ERROR_MESSAGE="Something went wrong.",
        MISSING_PERMISSIONS_ERROR_MESSAGE="I am missing permissions.",
    )


@pytest.fixture
def settings():
    return FakeSettings()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def bans():
    return FakeBans()


@pytest.fixture
def activity_logger():
    return RecordingActivityLogger()


@pytest.fixture
def environment(config, settings, identity, messenger, bans):
    return CommandEnvironment(
        config=config,
        settings=settings,
        identity=identity,
        messenger=messenger,
        bans=bans,
    )


@pytest.fixture
def make_context():
    def _make_context(
        content="ping",
        invoker_id=USER_ID,
        invoker_name="alice",
        channel_id=CHANNEL_ID,
        guild_id=GUILD_ID,
    ):
        return InvocationContext(
            content=content,
            invoker_id=invoker_id,
            invoker_name=invoker_name,
            channel_id=channel_id,
            guild_id=guild_id,
        )

    return _make_context
