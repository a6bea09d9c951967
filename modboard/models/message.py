from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from modboard.db.base import Base
from modboard.db.types import bigint_array, jsonb_array, text_array


class Message(Base):
    __tablename__ = "Message"
    __table_args__ = (
        Index("message_author_idx", "author_id"),
        Index("message_channel_idx", "channel_id"),
        Index("message_created_at_idx", "created_at"),
    )

    id: Mapped[int] = mapped_column("message_id", BigInteger, primary_key=True, autoincrement=False)
    channel_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    author_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    embeds: Mapped[list[dict] | None] = mapped_column(jsonb_array(), nullable=True)
    attachments: Mapped[list[str] | None] = mapped_column(text_array(), nullable=True)
    # Denormalized by the ingester at capture time; may lag behind edited content.
    member_mentions: Mapped[list[int] | None] = mapped_column(bigint_array(), nullable=True)
    role_mentions: Mapped[list[int] | None] = mapped_column(bigint_array(), nullable=True)
    channel_mentions: Mapped[list[int] | None] = mapped_column(bigint_array(), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    is_dm: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
