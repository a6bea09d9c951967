from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.core.enums import TicketSortBy, TicketStatus
from modboard.models import Channel, Message, Panel, Ticket, User
from modboard.repositories.filters import LIKE_ESCAPE, contains_pattern, normalize_text, parse_sequence


@dataclass(slots=True)
class TicketListFilter:
    status: TicketStatus | None = None
    author_id: int | None = None
    panel_id: int | None = None
    search: str | None = None
    sort_by: TicketSortBy = TicketSortBy.NEWEST
    limit: int | None = 50
    offset: int = 0


@dataclass(slots=True)
class TicketListRow:
    ticket: Ticket
    author: User | None
    channel: Channel | None
    panel: Panel | None
    message_count: int


@dataclass(slots=True)
class TicketChannelRow:
    channel_id: int
    channel_name: str
    ticket_id: int
    ticket_sequence: int | None
    ticket_status: TicketStatus


@dataclass(slots=True)
class TicketStats:
    open: int
    closed: int


def message_counts_cte():
    """Non-deleted message totals per channel, computed once per listing."""
    return (
        select(
            Message.channel_id.label("channel_id"),
            func.count().label("message_count"),
        )
        .where(Message.is_deleted.is_(False))
        .group_by(Message.channel_id)
        .cte("message_counts")
    )


class TicketRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _conditions(self, params: TicketListFilter) -> list:
        conditions = []
        if params.status is not None:
            conditions.append(Ticket.status == params.status)
        if params.author_id is not None:
            conditions.append(Ticket.author_id == params.author_id)
        if params.panel_id is not None:
            conditions.append(Ticket.panel_id == params.panel_id)
        search = normalize_text(params.search)
        if search:
            sequence = parse_sequence(search)
            if sequence is not None:
                conditions.append(Ticket.sequence == sequence)
            else:
                pattern = contains_pattern(search)
                conditions.append(
                    or_(
                        func.lower(User.name).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(User.display_name).like(pattern, escape=LIKE_ESCAPE),
                    )
                )
        return conditions

    def _listing_stmt(self):
        counts = message_counts_cte()
        message_count = func.coalesce(counts.c.message_count, 0)
        stmt = (
            select(Ticket, User, Channel, Panel, message_count.label("message_count"))
            .select_from(Ticket)
            .outerjoin(User, User.id == Ticket.author_id)
            .outerjoin(Channel, Channel.id == Ticket.channel_id)
            .outerjoin(Panel, Panel.id == Ticket.panel_id)
            .outerjoin(counts, counts.c.channel_id == Ticket.channel_id)
        )
        return stmt, message_count

    @staticmethod
    def _rows(result) -> list[TicketListRow]:
        return [
            TicketListRow(ticket=ticket, author=author, channel=channel, panel=panel, message_count=int(count or 0))
            for ticket, author, channel, panel, count in result.all()
        ]

    async def list_tickets(self, params: TicketListFilter) -> list[TicketListRow]:
        """One page of tickets with author, channel, panel and message count.

        ``search`` is a sequence lookup only when the trimmed text is a plain
        run of digits. Prefixed numbers such as ``"42abc"`` and signed ones
        such as ``"-3"`` are not read as sequences 42 and -3 the way a lenient
        integer parse would; they search author names instead.
        """
        stmt, message_count = self._listing_stmt()
        if params.sort_by == TicketSortBy.OLDEST:
            ordering = (Ticket.created_at.asc(), Ticket.id.asc())
        elif params.sort_by == TicketSortBy.MESSAGES:
            ordering = (message_count.desc(), Ticket.id.desc())
        else:
            ordering = (Ticket.created_at.desc(), Ticket.id.desc())
        conditions = self._conditions(params)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(*ordering).offset(params.offset)
        if params.limit is not None:
            stmt = stmt.limit(params.limit)
        result = await self.session.execute(stmt)
        return self._rows(result)

    async def count_tickets(self, params: TicketListFilter) -> int:
        stmt = select(func.count()).select_from(Ticket).outerjoin(User, User.id == Ticket.author_id)
        conditions = self._conditions(params)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        value = await self.session.scalar(stmt)
        return int(value or 0)

    async def get_ticket_by_id(self, ticket_id: int) -> TicketListRow | None:
        stmt, _ = self._listing_stmt()
        result = await self.session.execute(stmt.where(Ticket.id == ticket_id).limit(1))
        rows = self._rows(result)
        return rows[0] if rows else None

    async def list_ticket_channels(self, *, limit: int = 100) -> list[TicketChannelRow]:
        stmt = (
            select(Channel.id, Channel.name, Ticket.id, Ticket.sequence, Ticket.status)
            .select_from(Channel)
            .join(Ticket, Ticket.channel_id == Channel.id)
            .where(Channel.deleted.is_(False))
            .order_by(Ticket.created_at.desc(), Ticket.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            TicketChannelRow(
                channel_id=channel_id,
                channel_name=channel_name,
                ticket_id=ticket_id,
                ticket_sequence=sequence,
                ticket_status=status,
            )
            for channel_id, channel_name, ticket_id, sequence, status in result.all()
        ]

    async def get_user_ticket_stats(self, user_id: int) -> TicketStats:
        stmt = select(
            func.count().filter(Ticket.status == TicketStatus.OPEN).label("open_count"),
            func.count().filter(Ticket.status.in_([TicketStatus.CLOSED, TicketStatus.DELETED])).label("closed_count"),
        ).where(Ticket.author_id == user_id)
        row = (await self.session.execute(stmt)).one()
        return TicketStats(open=int(row.open_count or 0), closed=int(row.closed_count or 0))
