from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.models import Role, UserRoleAssignment
from modboard.repositories.filters import LIKE_ESCAPE, contains_pattern


class RoleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_staff_role_ids(self, keywords: Iterable[str]) -> set[int]:
        patterns = [contains_pattern(keyword) for keyword in keywords if keyword.strip()]
        if not patterns:
            return set()
        stmt = select(Role.id).where(or_(*[func.lower(Role.name).like(pattern, escape=LIKE_ESCAPE) for pattern in patterns]))
        result = await self.session.scalars(stmt)
        return set(result.all())

    async def list_roles(self) -> list[Role]:
        stmt = select(Role).where(Role.deleted.is_(False)).order_by(Role.position.desc(), Role.id.asc())
        result = await self.session.scalars(stmt)
        return list(result.all())

    async def list_user_roles(self, user_id: int) -> list[Role]:
        stmt = (
            select(Role)
            .join(UserRoleAssignment, UserRoleAssignment.role_id == Role.id)
            .where(UserRoleAssignment.user_id == user_id, Role.deleted.is_(False))
            .order_by(Role.position.desc(), Role.id.asc())
        )
        result = await self.session.scalars(stmt)
        return list(result.all())
