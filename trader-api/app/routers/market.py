from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.deps import get_db
from app.models.market_price import MarketPrice
from app.models.merchant import Merchant
from app.schemas.market import MarketPriceOut, MerchantOut
from app.services.inventory_policy import catalog_entry
from app.services.merchant_service import DEFAULT_SEARCH_RADIUS_M, find_nearby_merchants

router = APIRouter(prefix="/game", tags=["market"])


# ===== Prices =====

@router.get("/market/prices", response_model=list[MarketPriceOut])
def list_market_prices(db: Session = Depends(get_db)):
    prices = db.query(MarketPrice).order_by(MarketPrice.item_name).all()

    out = []
    for p in prices:
        item_class = catalog_entry(p)
        out.append(
            MarketPriceOut(
                item_name=p.item_name,
                district=p.district,
                category=p.category,
                base_price=p.base_price,
                current_price=p.current_price,
                demand_multiplier=p.demand_multiplier,
                grade=item_class.grade,
                required_license=item_class.required_license,
                last_updated=p.last_updated,
            )
        )
    return out


# ===== Merchants =====

@router.get("/merchants", response_model=list[MerchantOut])
def list_merchants(
    latitude: float | None = Query(None, description="Current latitude"),
    longitude: float | None = Query(None, description="Current longitude"),
    radius: int = Query(DEFAULT_SEARCH_RADIUS_M, ge=1, le=50000, description="Search radius in metres"),
    db: Session = Depends(get_db),
):
    """
    All merchants, or only those within `radius` metres of the given
    position (nearest first) when latitude and longitude are both set.
    """
    if latitude is None or longitude is None:
        merchants = db.query(Merchant).order_by(Merchant.district, Merchant.name).all()
        return [MerchantOut.model_validate(m) for m in merchants]

    out = []
    for merchant, distance in find_nearby_merchants(db, latitude, longitude, radius):
        m = MerchantOut.model_validate(merchant)
        m.distance_m = round(distance, 1)
        out.append(m)
    return out
