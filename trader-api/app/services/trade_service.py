"""
Trade engine
- Buy from / sell to a merchant
- License upgrade and daily bonus (same per-player serialization)

Every operation runs in one DB transaction on a locked player row and
returns a TradeOutcome. A failed precondition leaves no mutation behind.
"""
import logging
import threading
import uuid
import weakref
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.db import utcnow
from app.models.inventory_item import InventoryItem
from app.models.merchant import Merchant
from app.models.player import Player
from app.models.trade_record import TradeRecord
from app.services import license_service, progression_service
from app.services.inventory_policy import can_acquire, catalog_entry
from app.services.pricing_service import PricingModel
from app.services.trade_errors import TradeError, TradeErrorKind, TradeOutcome

logger = logging.getLogger(__name__)

SELL_PRICE_MULTIPLIER = Decimal("0.9")


def sell_unit_price(current_price: int) -> int:
    """Merchants buy back at 90% of the acquisition price, floored."""
    return int(Decimal(current_price) * SELL_PRICE_MULTIPLIER)


class TradeEngine:
    def __init__(
        self,
        session_factory: sessionmaker,
        pricing: PricingModel | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self.pricing = pricing or PricingModel(session_factory)
        self._clock = clock
        # Entries vanish once no thread holds or waits on the lock
        self._player_locks: weakref.WeakValueDictionary[uuid.UUID, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # ===== Plumbing =====

    def _player_lock(self, player_id: uuid.UUID) -> threading.Lock:
        with self._locks_guard:
            lock = self._player_locks.get(player_id)
            if lock is None:
                lock = self._player_locks[player_id] = threading.Lock()
            return lock

    def _run(self, action: str, player_id: uuid.UUID, op: Callable[[Session], dict[str, Any]]) -> TradeOutcome:
        with self._player_lock(player_id):
            db = self._session_factory()
            try:
                data = op(db)
                db.commit()
            except TradeError as e:
                db.rollback()
                logger.info(f"[Trade] {action} refused for player {player_id}: {e.kind.value} ({e.detail})")
                return TradeOutcome.fail(e)
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"[Trade] {action} failed for player {player_id}, rolled back")
                return TradeOutcome.fail(TradeError(TradeErrorKind.STORAGE_ERROR, f"{action} could not be saved"))
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

        logger.info(f"[Trade] {action} ok for player {player_id}: {data}")
        return TradeOutcome.ok(data)

    @staticmethod
    def _lock_player(db: Session, player_id: uuid.UUID) -> Player:
        player = db.query(Player).filter(Player.id == player_id).with_for_update().one_or_none()
        if not player:
            raise TradeError(TradeErrorKind.PLAYER_NOT_FOUND, f"Player {player_id} not found")
        return player

    @staticmethod
    def _get_merchant(db: Session, merchant_id: str) -> Merchant:
        merchant = db.get(Merchant, merchant_id)
        if not merchant:
            raise TradeError(TradeErrorKind.MERCHANT_NOT_FOUND, f"Merchant '{merchant_id}' not found")
        return merchant

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity < 1:
            raise TradeError(TradeErrorKind.INVALID_QUANTITY, "quantity must be >= 1")

    # ===== Buy =====

    def buy(self, player_id: uuid.UUID, merchant_id: str, item_name: str, quantity: int = 1) -> TradeOutcome:
        return self._run("buy", player_id, lambda db: self._buy(db, player_id, merchant_id, item_name, quantity))

    def _buy(self, db: Session, player_id: uuid.UUID, merchant_id: str, item_name: str, quantity: int) -> dict:
        self._check_quantity(quantity)
        player = self._lock_player(db, player_id)
        merchant = self._get_merchant(db, merchant_id)

        if player.current_license < merchant.required_license:
            raise TradeError(
                TradeErrorKind.LICENSE_INSUFFICIENT,
                f"Merchant requires license tier {merchant.required_license}",
            )

        if item_name not in (merchant.items or []):
            raise TradeError(TradeErrorKind.ITEM_NOT_OFFERED, f"{merchant.name} does not sell '{item_name}'")

        price = self.pricing.get_price(db, item_name)
        if not price:
            raise TradeError(TradeErrorKind.PRICE_NOT_FOUND, f"No market price for '{item_name}'")

        item_class = catalog_entry(price)
        if player.current_license < item_class.required_license:
            raise TradeError(
                TradeErrorKind.LICENSE_INSUFFICIENT,
                f"'{item_name}' requires license tier {item_class.required_license}",
            )

        total_price = price.current_price * quantity
        if player.money < total_price:
            raise TradeError(
                TradeErrorKind.INSUFFICIENT_FUNDS,
                f"Total is {total_price}, balance is {player.money}",
            )

        if not can_acquire(db, player, quantity):
            raise TradeError(TradeErrorKind.INVENTORY_FULL, "Not enough inventory space")

        now = self._clock()

        # 1. Pay
        player.money -= total_price

        # 2. Stack into inventory
        row = db.query(InventoryItem).filter(
            InventoryItem.player_id == player.id,
            InventoryItem.item_name == item_name,
        ).one_or_none()
        if not row:
            row = InventoryItem(
                player_id=player.id,
                item_name=item_name,
                item_category=price.category,
                quantity=0,
            )
            db.add(row)

        row.quantity += quantity
        row.base_price = price.base_price
        row.current_price = price.current_price
        row.item_grade = item_class.grade
        row.required_license = item_class.required_license
        row.acquired_at = now

        # 3. Progression
        progression_service.award_trade_trust(player)
        player.last_active = now

        # 4. Audit
        trade = TradeRecord(
            seller_id=None,
            buyer_id=player.id,
            merchant_id=merchant.id,
            item_name=item_name,
            item_category=price.category,
            price=total_price,
            quantity=quantity,
            trade_type="buy",
            location_lat=player.location_lat,
            location_lng=player.location_lng,
            timestamp=now,
        )
        db.add(trade)
        db.flush()

        return {
            "trade_id": trade.id,
            "item_id": row.id,
            "item_name": item_name,
            "quantity": quantity,
            "unit_price": price.current_price,
            "total_price": total_price,
            "money": player.money,
            "trust_points": player.trust_points,
        }

    # ===== Sell =====

    def sell(self, player_id: uuid.UUID, item_id: uuid.UUID, merchant_id: str, quantity: int = 1) -> TradeOutcome:
        return self._run("sell", player_id, lambda db: self._sell(db, player_id, item_id, merchant_id, quantity))

    def _sell(self, db: Session, player_id: uuid.UUID, item_id: uuid.UUID, merchant_id: str, quantity: int) -> dict:
        self._check_quantity(quantity)
        player = self._lock_player(db, player_id)

        row = db.query(InventoryItem).filter(
            InventoryItem.id == item_id,
            InventoryItem.player_id == player.id,
        ).one_or_none()
        if not row:
            raise TradeError(TradeErrorKind.ITEM_NOT_OWNED, f"Item {item_id} is not in this inventory")

        if row.quantity < quantity:
            raise TradeError(
                TradeErrorKind.INSUFFICIENT_QUANTITY,
                f"Holding {row.quantity} x '{row.item_name}', cannot sell {quantity}",
            )

        merchant = self._get_merchant(db, merchant_id)

        now = self._clock()
        unit_price = sell_unit_price(row.current_price)
        total_price = unit_price * quantity
        item_name = row.item_name
        item_category = row.item_category

        # 1. Get paid
        player.money += total_price

        # 2. Remove from inventory
        row.quantity -= quantity
        remaining = row.quantity
        if remaining == 0:
            db.delete(row)

        # 3. Progression
        progression_service.award_trade_trust(player)
        player.last_active = now

        # 4. Audit
        trade = TradeRecord(
            seller_id=player.id,
            buyer_id=None,
            merchant_id=merchant.id,
            item_name=item_name,
            item_category=item_category,
            price=total_price,
            quantity=quantity,
            trade_type="sell",
            location_lat=player.location_lat,
            location_lng=player.location_lng,
            timestamp=now,
        )
        db.add(trade)
        db.flush()

        return {
            "trade_id": trade.id,
            "item_id": item_id,
            "item_name": item_name,
            "quantity": quantity,
            "unit_price": unit_price,
            "total_price": total_price,
            "remaining_quantity": remaining,
            "money": player.money,
            "trust_points": player.trust_points,
        }

    # ===== Progression =====

    def upgrade_license(self, player_id: uuid.UUID) -> TradeOutcome:
        return self._run("license upgrade", player_id, lambda db: self._upgrade_license(db, player_id))

    def _upgrade_license(self, db: Session, player_id: uuid.UUID) -> dict:
        player = self._lock_player(db, player_id)
        cost = license_service.apply_upgrade(player)
        progression_service.award_upgrade_trust(player)
        player.last_active = self._clock()
        return {
            "current_license": player.current_license,
            "max_inventory_size": player.max_inventory_size,
            "cost": cost,
            "money": player.money,
            "trust_points": player.trust_points,
        }

    def claim_daily_bonus(self, player_id: uuid.UUID) -> TradeOutcome:
        return self._run("daily bonus", player_id, lambda db: self._claim_daily_bonus(db, player_id))

    def _claim_daily_bonus(self, db: Session, player_id: uuid.UUID) -> dict:
        player = self._lock_player(db, player_id)
        now = self._clock()
        amount = progression_service.claim_daily_bonus(player, now)
        player.last_active = now
        return {
            "bonus": amount,
            "money": player.money,
            "trust_points": player.trust_points,
        }
