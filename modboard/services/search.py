from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from modboard.repositories.mention import MentionRepository
from modboard.repositories.message import MessageRepository, MessageSearchFilter, MessageSearchRow
from modboard.repositories.role import RoleRepository
from modboard.schemas.mentions import MentionLookupRead
from modboard.services.mentions import MentionResolver
from modboard.services.staff_roles import StaffRoleCache


@dataclass(slots=True)
class MessageSearchPage:
    rows: list[MessageSearchRow]
    total: int
    mentions: MentionLookupRead


class MessageSearchService:
    def __init__(
        self,
        session: AsyncSession,
        staff_roles: StaffRoleCache,
        *,
        staff_role_keywords: Sequence[str],
        role_sessions: async_sessionmaker[AsyncSession],
    ) -> None:
        self.messages = MessageRepository(session)
        self.resolver = MentionResolver(MentionRepository(session))
        self.staff_roles = staff_roles
        self.staff_role_keywords = list(staff_role_keywords)
        self.role_sessions = role_sessions

    async def _fetch_staff_role_ids(self) -> set[int]:
        # Own session: a failed refresh must not abort the request transaction.
        async with self.role_sessions() as session:
            return await RoleRepository(session).list_staff_role_ids(self.staff_role_keywords)

    async def staff_role_ids(self) -> frozenset[int]:
        return await self.staff_roles.get(self._fetch_staff_role_ids)

    async def search(self, search: MessageSearchFilter) -> MessageSearchPage:
        # One snapshot serves both queries so the total matches the page.
        staff_role_ids = await self.staff_role_ids()
        rows = await self.messages.search_messages(search, staff_role_ids)
        total = await self.messages.count_messages(search, staff_role_ids)
        mentions = await self.resolver.resolve(row.message for row in rows)
        return MessageSearchPage(rows=rows, total=total, mentions=mentions)
