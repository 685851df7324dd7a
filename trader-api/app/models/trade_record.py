import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base, utcnow


class TradeRecord(Base):
    """Append-only trade log. Exactly one of seller_id / buyer_id is the player."""
    __tablename__ = "trades"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    seller_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)
    buyer_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)
    merchant_id: Mapped[str] = mapped_column(String(64), nullable=False)

    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    item_category: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # total for the whole quantity
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    trade_type: Mapped[str] = mapped_column(String(8), nullable=False)  # buy|sell

    location_lat: Mapped[float | None] = mapped_column(Float)
    location_lng: Mapped[float | None] = mapped_column(Float)

    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False, index=True)
