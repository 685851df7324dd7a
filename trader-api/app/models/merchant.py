from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base, utcnow


class Merchant(Base):
    __tablename__ = "merchants"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)  # retail|wholesale|black_market
    district: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)

    required_license: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    items: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)  # offered item names
    trust_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    last_restocked: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
