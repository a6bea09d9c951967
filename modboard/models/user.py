from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from modboard.db.base import Base


class User(Base):
    __tablename__ = "User"

    id: Mapped[int] = mapped_column("discord_id", BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    nick: Mapped[str | None] = mapped_column(String(255), nullable=True)
    in_guild: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
