from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from modboard.api import deps
from modboard.core.enums import TicketStatus
from modboard.db.base import Base
from modboard.main import app
from modboard.models import Channel, Message, Panel, Role, Ticket, User, UserRoleAssignment
from modboard.services.staff_roles import StaffRoleCache


TEST_DB_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
T0 = datetime(2026, 1, 1, 12, 0, 0)


def build_archive() -> list:
    """A small guild: alice (member), bob (moderator), carol42 (member) and an untracked author 1099."""
    return [
        User(id=1001, name="alice", display_name="Alice A", display_avatar="https://cdn.example/a.png"),
        User(id=1002, name="bob", display_name="Bob the Mod", nick="bobby"),
        User(id=1003, name="carol42", display_name="Carol"),
        Role(id=501, name="Moderator", color=0xFF0000, position=10),
        Role(id=502, name="Member", color=0x00FF00, position=1),
        Role(id=503, name="Server Admin", color=0x0000FF, position=20),
        Role(id=504, name="Old Helper", color=0, position=5, deleted=True),
        UserRoleAssignment(user_id=1002, role_id=501),
        UserRoleAssignment(user_id=1001, role_id=502),
        UserRoleAssignment(user_id=1003, role_id=502),
        Channel(id=2001, name="general", position=0),
        Channel(id=2002, name="ticket-0042", position=1),
        Channel(id=2003, name="ticket-0007", position=2),
        Channel(id=2004, name="ticket-0008", position=3, deleted=True),
        Panel(id=1, title="Support"),
        Panel(id=2, title="Appeals"),
        Ticket(id=1, channel_id=2002, author_id=1001, panel_id=1, status=TicketStatus.OPEN, sequence=42, created_at=T0 + timedelta(days=1)),
        Ticket(
            id=2,
            channel_id=2003,
            author_id=1003,
            panel_id=2,
            status=TicketStatus.CLOSED,
            sequence=7,
            created_at=T0 + timedelta(days=2),
            closed_at=T0 + timedelta(days=2, hours=1),
        ),
        Ticket(id=3, channel_id=None, author_id=1003, panel_id=1, status=TicketStatus.DELETED, sequence=100, created_at=T0 + timedelta(days=3)),
        Ticket(id=4, channel_id=2004, author_id=1002, panel_id=1, status=TicketStatus.CLOSED, sequence=8, created_at=T0 + timedelta(days=4)),
        Message(id=9001, channel_id=2001, author_id=1001, content="Hello <@1002> and <@&501>", created_at=T0 + timedelta(minutes=1)),
        Message(id=9002, channel_id=2001, author_id=1002, content="Mod reply: please read the RULES", created_at=T0 + timedelta(minutes=2)),
        Message(id=9003, channel_id=2002, author_id=1001, content="I need help with my ticket", created_at=T0 + timedelta(minutes=3)),
        Message(
            id=9004,
            channel_id=2002,
            author_id=1002,
            content="Sure, see <#2001>",
            embeds=[{"title": "Notice", "fields": [{"name": "<#2003>", "value": "x"}]}],
            attachments=["https://cdn.example/rules.png"],
            created_at=T0 + timedelta(minutes=4),
        ),
        Message(id=9005, channel_id=2002, author_id=1001, content="deleted help message", is_deleted=True, created_at=T0 + timedelta(minutes=5)),
        Message(id=9006, channel_id=2003, author_id=1003, content=None, embeds=[{"description": "<@1001> opened"}], created_at=T0 + timedelta(minutes=6)),
        Message(id=9007, channel_id=2001, author_id=1099, content="help from a ghost", created_at=T0 + timedelta(minutes=6)),
        Message(
            id=9008,
            channel_id=2004,
            author_id=1002,
            content="closing this help ticket",
            member_mentions=[1003],
            created_at=T0 + timedelta(minutes=7),
        ),
    ]


@pytest.fixture()
async def engine():
    options = {}
    if TEST_DB_URL.startswith("sqlite"):
        options = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    engine = create_async_engine(TEST_DB_URL, **options)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def archive(session_maker) -> None:
    async with session_maker() as session:
        session.add_all(build_archive())
        await session.commit()


@pytest.fixture()
async def db_session(session_maker, archive) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture()
def staff_role_cache() -> StaffRoleCache:
    return StaffRoleCache(ttl_seconds=300)


@pytest.fixture()
async def app_client(session_maker, archive, staff_role_cache):
    async def override_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[deps.get_db_session] = override_db
    app.dependency_overrides[deps.get_staff_role_cache] = lambda: staff_role_cache
    app.dependency_overrides[deps.get_session_factory] = lambda: session_maker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
