from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import utcnow
from app.deps import get_db, get_current_player
from app.models.inventory_item import InventoryItem
from app.models.player import Player
from app.schemas.player import (
    InventoryItemOut,
    LocationIn,
    LocationOut,
    LocationUpdateOut,
    PlayerOut,
)

router = APIRouter(prefix="/game/player", tags=["player"])


@router.get("", response_model=PlayerOut)
def get_player_data(
    db: Session = Depends(get_db),
    player: Player = Depends(get_current_player),
):
    """Player state with inventory, newest acquisitions first."""
    rows = (
        db.query(InventoryItem)
        .filter(InventoryItem.player_id == player.id)
        .order_by(InventoryItem.acquired_at.desc())
        .all()
    )

    return PlayerOut(
        id=player.id,
        name=player.name,
        money=player.money,
        trust_points=player.trust_points,
        current_license=player.current_license,
        max_inventory_size=player.max_inventory_size,
        inventory_used=sum(r.quantity for r in rows),
        location=LocationOut(lat=player.location_lat, lng=player.location_lng),
        last_active=player.last_active,
        inventory=[InventoryItemOut.model_validate(r) for r in rows],
    )


@router.put("/location", response_model=LocationUpdateOut)
def update_location(
    payload: LocationIn,
    db: Session = Depends(get_db),
    player: Player = Depends(get_current_player),
):
    try:
        player.location_lat = payload.latitude
        player.location_lng = payload.longitude
        player.last_active = utcnow()
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(player)
    return LocationUpdateOut(
        location=LocationOut(lat=player.location_lat, lng=player.location_lng),
        last_active=player.last_active,
    )
