from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ===== Trades =====

class BuyIn(BaseModel):
    merchant_id: str = Field(min_length=1, max_length=64)
    item_name: str = Field(min_length=1, max_length=100)
    quantity: int = Field(default=1, ge=1, le=10)


class SellIn(BaseModel):
    item_id: UUID
    merchant_id: str = Field(min_length=1, max_length=64)
    quantity: int = Field(default=1, ge=1)


class BuyOut(BaseModel):
    trade_id: UUID
    item_id: UUID
    item_name: str
    quantity: int
    unit_price: int
    total_price: int
    money: int
    trust_points: int


class SellOut(BaseModel):
    trade_id: UUID
    item_id: UUID
    item_name: str
    quantity: int
    unit_price: int
    total_price: int
    remaining_quantity: int
    money: int
    trust_points: int


class TradeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    merchant_id: str
    item_name: str
    item_category: str
    price: int
    quantity: int
    trade_type: str
    location_lat: float | None
    location_lng: float | None
    timestamp: datetime


class TradeHistoryOut(BaseModel):
    page: int
    limit: int
    total: int
    trades: list[TradeOut]


# ===== License / bonus =====

class LicenseStatusOut(BaseModel):
    current_license: int
    max_inventory_size: int
    money: int
    trust_points: int
    next_license: int | None
    upgrade_cost: int | None
    required_trust: int | None


class LicenseUpgradeOut(BaseModel):
    current_license: int
    max_inventory_size: int
    cost: int
    money: int
    trust_points: int


class DailyBonusOut(BaseModel):
    bonus: int
    money: int
    trust_points: int
