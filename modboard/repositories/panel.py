from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modboard.models import Panel


class PanelRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_panels(self) -> list[Panel]:
        result = await self.session.scalars(select(Panel).order_by(Panel.title.asc(), Panel.id.asc()))
        return list(result.all())
