from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.models import Channel, Role, User


class MentionRepository:
    """Batch lookups for entities referenced by mention syntax."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_users(self, user_ids: Collection[int]) -> list[User]:
        result = await self.session.scalars(select(User).where(User.id.in_(sorted(user_ids))))
        return list(result.all())

    async def get_roles(self, role_ids: Collection[int]) -> list[Role]:
        result = await self.session.scalars(select(Role).where(Role.id.in_(sorted(role_ids))))
        return list(result.all())

    async def get_channels(self, channel_ids: Collection[int]) -> list[Channel]:
        result = await self.session.scalars(select(Channel).where(Channel.id.in_(sorted(channel_ids))))
        return list(result.all())
