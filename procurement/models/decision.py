#procurement/models/decision.py
from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from procurement.db.base import Base


class DecisionRecord(Base):
    """One vote per (user, bid); a repeated vote overwrites the row."""

    __tablename__ = "decision"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("employee.id", ondelete="CASCADE"), primary_key=True
    )
    bid_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bid.id", ondelete="CASCADE"), primary_key=True
    )
    decision: Mapped[str] = mapped_column(String(16), nullable=False)
