"""
Inventory policy
- Capacity check (sum of quantities vs license capacity)
- Item grade / required license from the catalog, or from name markers
"""
import uuid
from typing import NamedTuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.inventory_item import InventoryItem
from app.models.market_price import MarketPrice
from app.models.player import Player
from app.services.license_service import capacity_for_tier


class ItemClass(NamedTuple):
    grade: str
    required_license: int


DEFAULT_ITEM_CLASS = ItemClass("common", 1)

# Checked from the highest tier down; first match wins
GRADE_MARKERS = [
    (("legendary", "전설"), ItemClass("legendary", 4)),
    (("high-grade", "고급"), ItemClass("epic", 3)),
    (("mid-tier", "중급"), ItemClass("rare", 2)),
    (("common", "커먼"), ItemClass("common", 1)),
]


def classify_item(item_name: str) -> ItemClass:
    """Infer grade and required license from markers in the display name."""
    name = item_name.lower()
    for markers, item_class in GRADE_MARKERS:
        if any(marker in name for marker in markers):
            return item_class
    return DEFAULT_ITEM_CLASS


def catalog_entry(price: MarketPrice) -> ItemClass:
    """Catalog fields win; missing ones fall back to name inference."""
    inferred = classify_item(price.item_name)
    return ItemClass(
        grade=price.grade or inferred.grade,
        required_license=price.required_license or inferred.required_license,
    )


def inventory_occupancy(db: Session, player_id: uuid.UUID) -> int:
    total = db.query(func.coalesce(func.sum(InventoryItem.quantity), 0)).filter(
        InventoryItem.player_id == player_id
    ).scalar()
    return int(total)


def can_acquire(db: Session, player: Player, quantity: int) -> bool:
    capacity = capacity_for_tier(player.current_license)
    return inventory_occupancy(db, player.id) + quantity <= capacity
