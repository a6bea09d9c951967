from __future__ import annotations

from pydantic import BaseModel


class RoleRead(BaseModel):
    id: str
    name: str
    color: int
    position: int


class PanelRead(BaseModel):
    id: int
    title: str
