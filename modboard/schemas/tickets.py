from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from modboard.core.enums import TicketStatus


class TicketAuthorRead(BaseModel):
    id: str
    name: str
    display_name: str | None = None
    display_avatar: str | None = None


class TicketChannelRead(BaseModel):
    id: str
    name: str


class TicketPanelRead(BaseModel):
    id: int
    title: str


class TicketRead(BaseModel):
    id: int
    sequence: int | None = None
    status: TicketStatus
    created_at: datetime | None = None
    closed_at: datetime | None = None
    author: TicketAuthorRead | None = None
    channel: TicketChannelRead | None = None
    panel: TicketPanelRead | None = None
    message_count: int = 0


class TicketChannelOptionRead(BaseModel):
    channel_id: str
    channel_name: str
    ticket_id: int
    ticket_sequence: int | None = None
    ticket_status: TicketStatus


class TicketStatsRead(BaseModel):
    open: int
    closed: int
