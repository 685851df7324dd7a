"""Shared fixtures: a throwaway SQLite database per test and a seeded market."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import random
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app import models  # noqa: F401
from app.core.db import Base
from app.models.inventory_item import InventoryItem
from app.models.merchant import Merchant
from app.models.player import Player
from app.models.trade_record import TradeRecord
from app.models.user import User
from app.services.market_seed import seed_market
from app.services.pricing_service import PricingModel
from app.services.trade_service import TradeEngine

GANGNAM = (37.5173, 126.9735)


class FakeClock:
    """Callable clock the tests can move forward."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker:
    db_engine = create_engine(
        f"sqlite:///{tmp_path / 'trader.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=db_engine)
    yield sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    db_engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db: Session) -> Session:
    seed_market(db)
    return db


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def pricing(session_factory: sessionmaker) -> PricingModel:
    return PricingModel(session_factory, rng=random.Random(42))


@pytest.fixture
def trade_engine(session_factory: sessionmaker, pricing: PricingModel, clock: FakeClock, seeded: Session) -> TradeEngine:
    return TradeEngine(session_factory, pricing=pricing, clock=clock)


@pytest.fixture
def make_player(session_factory: sessionmaker) -> Callable[..., uuid.UUID]:
    """Create a user + player and return the player id."""
    counter = iter(range(1, 10_000))

    def _make(
        money: int = 50000,
        license_tier: int = 1,
        trust_points: int = 0,
        location: tuple[float, float] | None = GANGNAM,
    ) -> uuid.UUID:
        n = next(counter)
        session = session_factory()
        try:
            user = User(email=f"player{n}@example.com", username=f"player{n}", password_hash="x")
            session.add(user)
            session.flush()
            player = Player(
                user_id=user.id,
                name=f"Player {n}",
                money=money,
                trust_points=trust_points,
                current_license=license_tier,
                max_inventory_size={1: 5, 2: 8, 3: 12, 4: 16, 5: 20}[license_tier],
                location_lat=location[0] if location else None,
                location_lng=location[1] if location else None,
            )
            session.add(player)
            session.commit()
            return player.id
        finally:
            session.close()

    return _make


@pytest.fixture
def give_item(session_factory: sessionmaker) -> Callable[..., uuid.UUID]:
    """Put a stack straight into a player's inventory and return its id."""

    def _give(player_id: uuid.UUID, item_name: str, quantity: int, price: int = 5000) -> uuid.UUID:
        session = session_factory()
        try:
            row = InventoryItem(
                player_id=player_id,
                item_name=item_name,
                item_category="Test",
                base_price=price,
                current_price=price,
                item_grade="common",
                required_license=1,
                quantity=quantity,
            )
            session.add(row)
            session.commit()
            return row.id
        finally:
            session.close()

    return _give


@pytest.fixture
def add_merchant(session_factory: sessionmaker) -> Callable[..., str]:
    def _add(merchant_id: str, items: list[str], required_license: int = 1) -> str:
        session = session_factory()
        try:
            session.add(
                Merchant(
                    id=merchant_id,
                    name=merchant_id,
                    type="retail",
                    district="Test",
                    location_lat=GANGNAM[0],
                    location_lng=GANGNAM[1],
                    required_license=required_license,
                    items=items,
                )
            )
            session.commit()
            return merchant_id
        finally:
            session.close()

    return _add


@pytest.fixture
def load_player(session_factory: sessionmaker) -> Callable[[uuid.UUID], Player]:
    """Fresh read of a player row, bypassing any cached session state."""

    def _load(player_id: uuid.UUID) -> Player:
        session = session_factory()
        try:
            return session.get(Player, player_id)
        finally:
            session.close()

    return _load


@pytest.fixture
def load_inventory(session_factory: sessionmaker) -> Callable[[uuid.UUID], list[InventoryItem]]:
    def _load(player_id: uuid.UUID) -> list[InventoryItem]:
        session = session_factory()
        try:
            return session.query(InventoryItem).filter(InventoryItem.player_id == player_id).all()
        finally:
            session.close()

    return _load


@pytest.fixture
def load_trades(session_factory: sessionmaker) -> Callable[[], list[TradeRecord]]:
    def _load() -> list[TradeRecord]:
        session = session_factory()
        try:
            return session.query(TradeRecord).order_by(TradeRecord.timestamp).all()
        finally:
            session.close()

    return _load
