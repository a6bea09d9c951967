from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from modboard.core.config import Settings, get_settings
from modboard.db.session import SessionLocal, get_session
from modboard.services.search import MessageSearchService
from modboard.services.staff_roles import StaffRoleCache

settings = get_settings()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return SessionLocal


def build_staff_role_cache(app_settings: Settings) -> StaffRoleCache:
    return StaffRoleCache(
        ttl_seconds=app_settings.staff_role_cache_ttl_sec,
        serve_stale=app_settings.staff_role_cache_serve_stale,
    )


def get_staff_role_cache(request: Request) -> StaffRoleCache:
    cache = getattr(request.app.state, "staff_role_cache", None)
    if cache is None:
        cache = build_staff_role_cache(settings)
        request.app.state.staff_role_cache = cache
    return cache


def get_message_search_service(
    session: AsyncSession = Depends(get_db_session),
    staff_roles: StaffRoleCache = Depends(get_staff_role_cache),
    role_sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> MessageSearchService:
    return MessageSearchService(
        session,
        staff_roles,
        staff_role_keywords=settings.staff_role_keywords,
        role_sessions=role_sessions,
    )
