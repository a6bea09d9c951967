from __future__ import annotations

from pydantic import BaseModel, Field


class MentionedUserRead(BaseModel):
    name: str
    display_name: str | None = None
    display_avatar: str | None = None


class MentionedRoleRead(BaseModel):
    name: str
    color: int


class MentionedChannelRead(BaseModel):
    name: str


class MentionLookupRead(BaseModel):
    # Keys are entity IDs rendered as strings; a missing key means unknown or deleted.
    users: dict[str, MentionedUserRead] = Field(default_factory=dict)
    roles: dict[str, MentionedRoleRead] = Field(default_factory=dict)
    channels: dict[str, MentionedChannelRead] = Field(default_factory=dict)
