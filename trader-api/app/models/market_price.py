from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base, utcnow


class MarketPrice(Base):
    """
    Current market quote for one item, keyed by item name.
    grade / required_license are catalog fields; when NULL they are
    inferred from the item name (see inventory_policy.classify_item).
    """
    __tablename__ = "market_prices"

    item_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    district: Mapped[str] = mapped_column(String(50), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)

    base_price: Mapped[int] = mapped_column(Integer, nullable=False)
    current_price: Mapped[int] = mapped_column(Integer, nullable=False)
    demand_multiplier: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    grade: Mapped[str | None] = mapped_column(String(16))
    required_license: Mapped[int | None] = mapped_column(Integer)

    last_updated: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
