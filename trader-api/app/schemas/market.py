from datetime import datetime

from pydantic import BaseModel, ConfigDict


# ===== Prices =====

class MarketPriceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_name: str
    district: str
    category: str
    base_price: int
    current_price: int
    demand_multiplier: float
    grade: str
    required_license: int
    last_updated: datetime


# ===== Merchants =====

class MerchantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: str
    district: str
    location_lat: float
    location_lng: float
    required_license: int
    items: list[str]
    trust_level: int
    last_restocked: datetime
    distance_m: float | None = None
