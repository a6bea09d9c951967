from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.api.deps import get_db_session
from modboard.api.params import parse_snowflake
from modboard.api.v1.endpoints.roles import serialize_role
from modboard.core.responses import success_response
from modboard.repositories.role import RoleRepository
from modboard.repositories.ticket import TicketRepository
from modboard.schemas.tickets import TicketStatsRead

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}/roles")
async def list_user_roles(user_id: str, request: Request, session: AsyncSession = Depends(get_db_session)):
    roles = await RoleRepository(session).list_user_roles(parse_snowflake(user_id, "user_id", required=True))
    return success_response(data=[serialize_role(role) for role in roles], request=request)


@router.get("/{user_id}/ticket-stats")
async def get_user_ticket_stats(user_id: str, request: Request, session: AsyncSession = Depends(get_db_session)):
    stats = await TicketRepository(session).get_user_ticket_stats(parse_snowflake(user_id, "user_id", required=True))
    return success_response(data=TicketStatsRead(open=stats.open, closed=stats.closed).model_dump(), request=request)
