from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from modboard.core.enums import TicketStatus
from modboard.schemas.mentions import MentionLookupRead


class MessageAuthorRead(BaseModel):
    id: str
    name: str
    display_name: str | None = None
    nick: str | None = None
    display_avatar: str | None = None


class MessageChannelRead(BaseModel):
    id: str
    name: str


class MessageTicketRead(BaseModel):
    id: int
    sequence: int | None = None
    status: TicketStatus
    created_at: datetime | None = None


class MessageRead(BaseModel):
    id: str
    content: str | None = None
    created_at: datetime | None = None
    is_deleted: bool
    is_staff: bool
    embeds: list[dict[str, Any]] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)
    author: MessageAuthorRead | None = None
    channel: MessageChannelRead | None = None
    ticket: MessageTicketRead | None = None


class MessageSearchRead(BaseModel):
    items: list[MessageRead] = Field(default_factory=list)
    mentions: MentionLookupRead = Field(default_factory=MentionLookupRead)
    guild_id: str | None = None
