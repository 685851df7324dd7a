"""
Initial market of the Seoul map: price rows and merchants.
Inserts only what is missing, so it can run on every deploy.
"""
import logging

from sqlalchemy.orm import Session

from app.models.market_price import MarketPrice
from app.models.merchant import Merchant
from app.services.inventory_policy import classify_item

logger = logging.getLogger(__name__)

# Format: (item_name, category, base_price, district)
INITIAL_MARKET_PRICES = [
    ("IT Parts (Common)", "IT Parts", 5000, "Gangnam"),
    ("IT Parts (Mid-tier)", "IT Parts", 15000, "Gangnam"),
    ("IT Parts (High-grade)", "IT Parts", 35000, "Gangnam"),
    ("Luxury Goods (Common)", "Luxury Goods", 10000, "Gangnam"),
    ("Luxury Goods (Mid-tier)", "Luxury Goods", 25000, "Gangnam"),
    ("Artwork (Common)", "Artwork", 8000, "Hongdae"),
    ("Artwork (Mid-tier)", "Artwork", 20000, "Hongdae"),
    ("Cosmetics (Common)", "Cosmetics", 3000, "Myeongdong"),
    ("Cosmetics (Mid-tier)", "Cosmetics", 8000, "Myeongdong"),
    ("Books (Common)", "Books", 2000, "Sinchon"),
    ("Household Goods (Common)", "Household Goods", 1500, "Gangbuk"),
]

# Format: (id, name, type, district, lat, lng, required_license, items)
INITIAL_MERCHANTS = [
    (
        "merchant_gangnam_1", "Gangnam IT Dealer", "retail", "Gangnam", 37.5173, 126.9735, 1,
        ["IT Parts (Common)", "IT Parts (Mid-tier)"],
    ),
    (
        "merchant_gangnam_2", "Gangnam Luxury House", "wholesale", "Gangnam", 37.5172, 127.0473, 3,
        ["IT Parts (High-grade)", "Luxury Goods (Common)", "Luxury Goods (Mid-tier)"],
    ),
    (
        "merchant_hongdae_1", "Hongdae Art Dealer", "retail", "Hongdae", 37.5563, 126.9236, 1,
        ["Artwork (Common)", "Artwork (Mid-tier)"],
    ),
    (
        "merchant_myeongdong_1", "Myeongdong Cosmetics", "retail", "Myeongdong", 37.5636, 126.9834, 1,
        ["Cosmetics (Common)", "Cosmetics (Mid-tier)"],
    ),
    (
        "merchant_sinchon_1", "Sinchon Bookstore", "retail", "Sinchon", 37.5598, 126.9425, 1,
        ["Books (Common)", "Household Goods (Common)"],
    ),
]


def seed_market(db: Session) -> tuple[int, int]:
    """Insert missing price rows and merchants. Returns (prices, merchants) created."""
    created_prices = 0
    for item_name, category, base_price, district in INITIAL_MARKET_PRICES:
        if db.get(MarketPrice, item_name):
            continue
        item_class = classify_item(item_name)
        db.add(
            MarketPrice(
                item_name=item_name,
                district=district,
                category=category,
                base_price=base_price,
                current_price=base_price,
                demand_multiplier=1.0,
                grade=item_class.grade,
                required_license=item_class.required_license,
            )
        )
        created_prices += 1

    created_merchants = 0
    for merchant_id, name, kind, district, lat, lng, license_tier, items in INITIAL_MERCHANTS:
        if db.get(Merchant, merchant_id):
            continue
        db.add(
            Merchant(
                id=merchant_id,
                name=name,
                type=kind,
                district=district,
                location_lat=lat,
                location_lng=lng,
                required_license=license_tier,
                items=items,
            )
        )
        created_merchants += 1

    db.commit()
    logger.info(f"[Seed] {created_prices} market prices, {created_merchants} merchants created")
    return created_prices, created_merchants
