"""
Seoul Trader - Player game state.
One row per registered user; money/trust/license are mutated only through
the trade engine.
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base, utcnow

if TYPE_CHECKING:
    from .user import User
    from .inventory_item import InventoryItem


class Player(Base):
    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("money >= 0", name="ck_player_money_non_negative"),
        CheckConstraint("trust_points >= 0", name="ck_player_trust_non_negative"),
        CheckConstraint("current_license BETWEEN 1 AND 5", name="ck_player_license_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    money: Mapped[int] = mapped_column(Integer, nullable=False, default=50000)
    trust_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_license: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_inventory_size: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    location_lat: Mapped[float | None] = mapped_column(Float)
    location_lng: Mapped[float | None] = mapped_column(Float)

    last_active: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    last_daily_bonus_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="player")
    inventory: Mapped[List["InventoryItem"]] = relationship(
        "InventoryItem",
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="InventoryItem.acquired_at.desc()",
    )
