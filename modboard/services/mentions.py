from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from modboard.models import Message
from modboard.repositories.mention import MentionRepository
from modboard.schemas.mentions import (
    MentionedChannelRead,
    MentionedRoleRead,
    MentionedUserRead,
    MentionLookupRead,
)

# <@123> or <@!123> user, <@&123> role, <#123> channel
MENTION_PATTERN = re.compile(r"<@!?(\d+)>|<@&(\d+)>|<#(\d+)>")
MAX_SNOWFLAKE = 2**63 - 1
UNKNOWN_USER_NAME = "Unknown User"


@dataclass(slots=True)
class MentionIds:
    users: set[int] = field(default_factory=set)
    roles: set[int] = field(default_factory=set)
    channels: set[int] = field(default_factory=set)

    def update(self, other: "MentionIds") -> None:
        self.users |= other.users
        self.roles |= other.roles
        self.channels |= other.channels

    def is_empty(self) -> bool:
        return not (self.users or self.roles or self.channels)


def _snowflakes(values: Iterable[Any] | None) -> set[int]:
    ids: set[int] = set()
    for value in values or ():
        try:
            snowflake = int(value)
        except (TypeError, ValueError):
            continue
        if 0 < snowflake <= MAX_SNOWFLAKE:
            ids.add(snowflake)
    return ids


def extract_mention_ids(text: str | None) -> MentionIds:
    ids = MentionIds()
    if not text:
        return ids
    for user_id, role_id, channel_id in MENTION_PATTERN.findall(text):
        if user_id:
            ids.users |= _snowflakes([user_id])
        elif role_id:
            ids.roles |= _snowflakes([role_id])
        elif channel_id:
            ids.channels |= _snowflakes([channel_id])
    return ids


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def embed_texts(embed: Any) -> Iterator[str]:
    """Yield every embed string that can carry mention syntax."""
    if not isinstance(embed, dict):
        return
    for key in ("title", "description"):
        text = _text(embed.get(key))
        if text:
            yield text
    for key, subkey in (("author", "name"), ("footer", "text")):
        nested = embed.get(key)
        if isinstance(nested, dict):
            text = _text(nested.get(subkey))
            if text:
                yield text
    fields = embed.get("fields")
    if isinstance(fields, list):
        for item in fields:
            if not isinstance(item, dict):
                continue
            for key in ("name", "value"):
                text = _text(item.get(key))
                if text:
                    yield text


def _embeds(message: Message) -> list[Any]:
    embeds = message.embeds
    if embeds is None:
        return []
    if isinstance(embeds, dict):
        return [embeds]
    return list(embeds)


def collect_mention_ids(messages: Iterable[Message]) -> MentionIds:
    ids = MentionIds()
    for message in messages:
        # Stored arrays may be stale after an edit, so both sources are unioned.
        ids.users |= _snowflakes(message.member_mentions)
        ids.roles |= _snowflakes(message.role_mentions)
        ids.channels |= _snowflakes(message.channel_mentions)
        ids.update(extract_mention_ids(message.content))
        for embed in _embeds(message):
            for text in embed_texts(embed):
                ids.update(extract_mention_ids(text))
    return ids


class MentionResolver:
    def __init__(self, repo: MentionRepository) -> None:
        self.repo = repo

    async def resolve(self, messages: Iterable[Message]) -> MentionLookupRead:
        ids = collect_mention_ids(messages)
        lookup = MentionLookupRead()
        if ids.users:
            for user in await self.repo.get_users(ids.users):
                lookup.users[str(user.id)] = MentionedUserRead(
                    name=user.name or user.display_name or UNKNOWN_USER_NAME,
                    display_name=user.display_name,
                    display_avatar=user.display_avatar,
                )
        if ids.roles:
            for role in await self.repo.get_roles(ids.roles):
                lookup.roles[str(role.id)] = MentionedRoleRead(name=role.name, color=role.color)
        if ids.channels:
            for channel in await self.repo.get_channels(ids.channels):
                lookup.channels[str(channel.id)] = MentionedChannelRead(name=channel.name)
        return lookup
