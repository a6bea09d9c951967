from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from sqlalchemy import and_, exists, false, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.core.enums import SortOrder
from modboard.models import Channel, Message, Ticket, User, UserRoleAssignment
from modboard.repositories.filters import LIKE_ESCAPE, contains_pattern, non_blank


@dataclass(slots=True)
class MessageSearchFilter:
    query: str | None = None
    staff_only: bool = False
    ticket_id: int | None = None
    channel_id: int | None = None
    limit: int | None = 50
    offset: int = 0
    sort_order: SortOrder = SortOrder.DESC


@dataclass(slots=True)
class MessageSearchRow:
    message: Message
    author: User | None
    channel: Channel | None
    ticket: Ticket | None
    is_staff: bool


def staff_author_clause(staff_role_ids: Collection[int]):
    return (
        exists()
        .where(
            UserRoleAssignment.user_id == Message.author_id,
            UserRoleAssignment.role_id.in_(sorted(staff_role_ids)),
        )
        .correlate(Message)
    )


class MessageRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _conditions(self, search: MessageSearchFilter, staff_role_ids: Collection[int]) -> list:
        conditions = [Message.is_deleted.is_(False)]
        query = non_blank(search.query)
        if query:
            conditions.append(func.lower(Message.content).like(contains_pattern(query), escape=LIKE_ESCAPE))
        if search.channel_id is not None:
            conditions.append(Message.channel_id == search.channel_id)
        if search.staff_only:
            # No staff roles known means nobody can be staff.
            conditions.append(staff_author_clause(staff_role_ids) if staff_role_ids else false())
        if search.ticket_id is not None:
            conditions.append(Ticket.id == search.ticket_id)
        return conditions

    async def search_messages(self, search: MessageSearchFilter, staff_role_ids: Collection[int]) -> list[MessageSearchRow]:
        is_staff = staff_author_clause(staff_role_ids) if staff_role_ids else false()
        if search.sort_order == SortOrder.ASC:
            ordering = (Message.created_at.asc(), Message.id.asc())
        else:
            ordering = (Message.created_at.desc(), Message.id.desc())
        stmt = (
            select(Message, User, Channel, Ticket, is_staff.label("is_staff"))
            .select_from(Message)
            .outerjoin(User, User.id == Message.author_id)
            .outerjoin(Channel, Channel.id == Message.channel_id)
            .outerjoin(Ticket, Ticket.channel_id == Channel.id)
            .where(and_(*self._conditions(search, staff_role_ids)))
            .order_by(*ordering)
            .offset(search.offset)
        )
        if search.limit is not None:
            stmt = stmt.limit(search.limit)
        result = await self.session.execute(stmt)
        return [
            MessageSearchRow(message=message, author=author, channel=channel, ticket=ticket, is_staff=bool(staff_flag))
            for message, author, channel, ticket, staff_flag in result.all()
        ]

    async def count_messages(self, search: MessageSearchFilter, staff_role_ids: Collection[int]) -> int:
        stmt = select(func.count()).select_from(Message)
        if search.ticket_id is not None:
            stmt = stmt.join(Channel, Channel.id == Message.channel_id).join(Ticket, Ticket.channel_id == Channel.id)
        stmt = stmt.where(and_(*self._conditions(search, staff_role_ids)))
        value = await self.session.scalar(stmt)
        return int(value or 0)
