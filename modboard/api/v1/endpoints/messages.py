from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from modboard.api.deps import get_message_search_service, settings
from modboard.api.params import page_offset, parse_snowflake
from modboard.core.enums import MessageViewMode, SortOrder
from modboard.core.responses import build_pagination, success_response
from modboard.repositories.filters import MAX_INT_COLUMN
from modboard.repositories.message import MessageSearchFilter, MessageSearchRow
from modboard.schemas.messages import (
    MessageAuthorRead,
    MessageChannelRead,
    MessageRead,
    MessageSearchRead,
    MessageTicketRead,
)
from modboard.services.mentions import UNKNOWN_USER_NAME
from modboard.services.search import MessageSearchService

router = APIRouter(prefix="/messages", tags=["Messages"])


def _serialize_row(row: MessageSearchRow) -> MessageRead:
    message, author, channel, ticket = row.message, row.author, row.channel, row.ticket
    return MessageRead(
        id=str(message.id),
        content=message.content,
        created_at=message.created_at,
        is_deleted=bool(message.is_deleted),
        is_staff=row.is_staff,
        embeds=[item for item in (message.embeds or []) if isinstance(item, dict)],
        attachments=[str(item) for item in (message.attachments or [])],
        author=MessageAuthorRead(
            id=str(author.id),
            name=author.name or author.display_name or author.nick or UNKNOWN_USER_NAME,
            display_name=author.display_name,
            nick=author.nick,
            display_avatar=author.display_avatar,
        )
        if author
        else None,
        channel=MessageChannelRead(id=str(channel.id), name=channel.name) if channel else None,
        ticket=MessageTicketRead(
            id=ticket.id,
            sequence=ticket.sequence,
            status=ticket.status,
            created_at=ticket.created_at,
        )
        if ticket
        else None,
    )


@router.get("")
async def search_messages(
    request: Request,
    service: MessageSearchService = Depends(get_message_search_service),
    q: str | None = Query(default=None, max_length=500),
    staff_only: bool = Query(default=False),
    ticket_id: int | None = Query(default=None, ge=1, le=MAX_INT_COLUMN),
    channel_id: str | None = Query(default=None),
    mode: MessageViewMode = Query(default=MessageViewMode.SEARCH),
    page: int = Query(default=1, ge=1, le=MAX_INT_COLUMN),
    limit: int | None = Query(default=None, ge=1, le=settings.max_page_limit),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
):
    transcript = mode == MessageViewMode.TRANSCRIPT
    if limit is None:
        limit = settings.transcript_default_limit if transcript else settings.search_default_limit
    search = MessageSearchFilter(
        query=None if transcript else q,
        staff_only=staff_only,
        ticket_id=ticket_id,
        channel_id=parse_snowflake(channel_id, "channel_id"),
        limit=limit,
        offset=page_offset(page, limit),
        # Transcripts read oldest to newest.
        sort_order=SortOrder.ASC if transcript else sort_order,
    )
    result = await service.search(search)
    data = MessageSearchRead(
        items=[_serialize_row(row) for row in result.rows],
        mentions=result.mentions,
        guild_id=settings.discord_guild_id,
    )
    return success_response(data=data.model_dump(mode="json"), request=request, pagination=build_pagination(result.total, page, limit))
