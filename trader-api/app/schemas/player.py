"""
Seoul Trader - Player schemas
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LocationOut(BaseModel):
    lat: float | None
    lng: float | None


class InventoryItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    item_name: str
    item_category: str
    base_price: int
    current_price: int
    item_grade: str
    required_license: int
    quantity: int
    acquired_at: datetime


class PlayerOut(BaseModel):
    id: UUID
    name: str
    money: int
    trust_points: int
    current_license: int
    max_inventory_size: int
    inventory_used: int
    location: LocationOut
    last_active: datetime
    inventory: list[InventoryItemOut]


# Seoul only: rough bounding box of the city
class LocationIn(BaseModel):
    latitude: float = Field(ge=37.4, le=37.7)
    longitude: float = Field(ge=126.8, le=127.2)


class LocationUpdateOut(BaseModel):
    location: LocationOut
    last_active: datetime
