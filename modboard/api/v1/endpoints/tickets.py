from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.api.deps import get_db_session, settings
from modboard.api.params import page_offset, parse_snowflake
from modboard.core.enums import TicketSortBy, TicketStatus
from modboard.core.exceptions import NotFoundError
from modboard.core.responses import build_pagination, success_response
from modboard.repositories.filters import MAX_INT_COLUMN
from modboard.repositories.ticket import TicketListFilter, TicketListRow, TicketRepository
from modboard.schemas.tickets import (
    TicketAuthorRead,
    TicketChannelOptionRead,
    TicketChannelRead,
    TicketPanelRead,
    TicketRead,
)
from modboard.services.mentions import UNKNOWN_USER_NAME

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def _serialize_ticket(row: TicketListRow) -> TicketRead:
    ticket, author, channel, panel = row.ticket, row.author, row.channel, row.panel
    return TicketRead(
        id=ticket.id,
        sequence=ticket.sequence,
        status=ticket.status,
        created_at=ticket.created_at,
        closed_at=ticket.closed_at,
        author=TicketAuthorRead(
            id=str(author.id),
            name=author.name or author.display_name or UNKNOWN_USER_NAME,
            display_name=author.display_name,
            display_avatar=author.display_avatar,
        )
        if author
        else None,
        channel=TicketChannelRead(id=str(channel.id), name=channel.name) if channel else None,
        panel=TicketPanelRead(id=panel.id, title=panel.title) if panel else None,
        message_count=row.message_count,
    )


@router.get("")
async def list_tickets(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    status: TicketStatus | None = Query(default=None),
    author_id: str | None = Query(default=None),
    panel_id: int | None = Query(default=None, ge=1, le=MAX_INT_COLUMN),
    search: str | None = Query(default=None, max_length=200),
    sort_by: TicketSortBy = Query(default=TicketSortBy.NEWEST),
    page: int = Query(default=1, ge=1, le=MAX_INT_COLUMN),
    limit: int = Query(default=settings.ticket_default_limit, ge=1, le=settings.max_page_limit),
):
    params = TicketListFilter(
        status=status,
        author_id=parse_snowflake(author_id, "author_id"),
        panel_id=panel_id,
        search=search,
        sort_by=sort_by,
        limit=limit,
        offset=page_offset(page, limit),
    )
    repo = TicketRepository(session)
    items = await repo.list_tickets(params)
    total = await repo.count_tickets(params)
    data = [_serialize_ticket(item).model_dump(mode="json") for item in items]
    return success_response(data=data, request=request, pagination=build_pagination(total, page, limit))


@router.get("/channels")
async def list_ticket_channels(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    items = await TicketRepository(session).list_ticket_channels(limit=settings.ticket_channels_limit)
    data = [
        TicketChannelOptionRead(
            channel_id=str(item.channel_id),
            channel_name=item.channel_name,
            ticket_id=item.ticket_id,
            ticket_sequence=item.ticket_sequence,
            ticket_status=item.ticket_status,
        ).model_dump(mode="json")
        for item in items
    ]
    return success_response(data=data, request=request)


@router.get("/{ticket_id}")
async def get_ticket(
    request: Request,
    ticket_id: int = Path(ge=1, le=MAX_INT_COLUMN),
    session: AsyncSession = Depends(get_db_session),
):
    row = await TicketRepository(session).get_ticket_by_id(ticket_id)
    if row is None:
        raise NotFoundError("Ticket not found", details={"ticket_id": ticket_id})
    return success_response(data=_serialize_ticket(row).model_dump(mode="json"), request=request)
