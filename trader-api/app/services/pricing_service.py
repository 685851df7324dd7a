"""
Market pricing
Bounded random walk on every market row, run by the scheduler.
"""
import logging
import math
import random

from sqlalchemy.orm import Session, sessionmaker

from app.core.db import utcnow
from app.models.market_price import MarketPrice

logger = logging.getLogger(__name__)

# Configuration
MAX_PRICE_VARIATION = 0.2  # +/-20% per tick
MIN_PRICE_RATIO = 0.5      # price never below 50% of base
MAX_PRICE_RATIO = 1.5      # price never above 150% of base


def price_bounds(base_price: int) -> tuple[int, int]:
    """Integer range a recomputed price may take."""
    return math.ceil(base_price * MIN_PRICE_RATIO), math.floor(base_price * MAX_PRICE_RATIO)


def next_price(base_price: int, current_price: int, rng: random.Random) -> int:
    variation = rng.uniform(-MAX_PRICE_VARIATION, MAX_PRICE_VARIATION)
    candidate = math.floor(current_price * (1 + variation))
    low, high = price_bounds(base_price)
    return max(low, min(high, candidate))


class PricingModel:
    def __init__(self, session_factory: sessionmaker, rng: random.Random | None = None):
        self._session_factory = session_factory
        self._rng = rng or random.Random()

    def get_price(self, db: Session, item_name: str) -> MarketPrice | None:
        return db.get(MarketPrice, item_name)

    def current_price(self, db: Session, item_name: str) -> int | None:
        price = self.get_price(db, item_name)
        return price.current_price if price else None

    def recompute(self, db: Session, item_name: str) -> int | None:
        """Draw a new price for one item. The caller commits."""
        price = self.get_price(db, item_name)
        if not price:
            logger.debug(f"[Pricing] No market row for '{item_name}', skipped")
            return None

        price.current_price = next_price(price.base_price, price.current_price, self._rng)
        price.last_updated = utcnow()
        return price.current_price

    def recompute_all(self) -> dict[str, int]:
        """Scheduler job: one new draw for every market row."""
        db = self._session_factory()
        updated: dict[str, int] = {}
        try:
            names = [name for (name,) in db.query(MarketPrice.item_name).order_by(MarketPrice.item_name).all()]
            for name in names:
                new_price = self.recompute(db, name)
                if new_price is not None:
                    updated[name] = new_price
            db.commit()
            logger.info(f"[Pricing] {len(updated)} market prices updated")
        except Exception:
            db.rollback()
            logger.exception("[Pricing] Price update failed, rolled back")
            updated = {}
        finally:
            db.close()
        return updated
