from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.api.deps import get_db_session
from modboard.core.responses import success_response
from modboard.models import Role
from modboard.repositories.panel import PanelRepository
from modboard.repositories.role import RoleRepository
from modboard.schemas.roles import PanelRead, RoleRead

router = APIRouter(tags=["Roles"])


def serialize_role(role: Role) -> dict:
    return RoleRead(id=str(role.id), name=role.name, color=role.color, position=role.position).model_dump()


@router.get("/roles")
async def list_roles(request: Request, session: AsyncSession = Depends(get_db_session)):
    roles = await RoleRepository(session).list_roles()
    return success_response(data=[serialize_role(role) for role in roles], request=request)


@router.get("/panels", tags=["Panels"])
async def list_panels(request: Request, session: AsyncSession = Depends(get_db_session)):
    panels = await PanelRepository(session).list_panels()
    data = [PanelRead(id=panel.id, title=panel.title).model_dump() for panel in panels]
    return success_response(data=data, request=request)
