import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base, utcnow

if TYPE_CHECKING:
    from .player import Player


class InventoryItem(Base):
    """
    A stack of one item held by a player.
    Prices are snapshots of the market row at the last purchase.
    """
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("player_id", "item_name", name="uq_inventory_player_item"),
        CheckConstraint("quantity > 0", name="ck_inventory_quantity_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    item_category: Mapped[str] = mapped_column(String(50), nullable=False)
    base_price: Mapped[int] = mapped_column(Integer, nullable=False)
    current_price: Mapped[int] = mapped_column(Integer, nullable=False)
    item_grade: Mapped[str] = mapped_column(String(16), nullable=False)  # common|rare|epic|legendary
    required_license: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    acquired_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    player: Mapped["Player"] = relationship("Player", back_populates="inventory")
