from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from modboard.core.enums import TicketStatus
from modboard.db.base import Base
from modboard.db.types import db_enum


class Ticket(Base):
    __tablename__ = "Ticket"
    __table_args__ = (
        Index("ticket_channel_idx", "channel_id"),
        Index("ticket_author_status_panel_idx", "author_id", "status", "panel_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, unique=True)
    author_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    panel_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[TicketStatus] = mapped_column(
        db_enum(TicketStatus, "TicketStatus"),
        nullable=False,
        default=TicketStatus.OPEN,
    )
    sequence: Mapped[int | None] = mapped_column(Integer, nullable=True)
    closed_by_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    closed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
