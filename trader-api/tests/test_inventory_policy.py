"""Tests for inventory capacity and item classification."""

from typing import Callable

import pytest
from sqlalchemy.orm import Session

from app.models.market_price import MarketPrice
from app.models.player import Player
from app.services.inventory_policy import (
    ItemClass,
    can_acquire,
    catalog_entry,
    classify_item,
    inventory_occupancy,
)


class TestClassifyItem:
    @pytest.mark.parametrize("name, expected", [
        ("IT Parts (Common)", ItemClass("common", 1)),
        ("IT Parts (Mid-tier)", ItemClass("rare", 2)),
        ("IT Parts (High-grade)", ItemClass("epic", 3)),
        ("Legendary Jade Seal", ItemClass("legendary", 4)),
        ("IT부품 (커먼)", ItemClass("common", 1)),
        ("IT부품 (중급)", ItemClass("rare", 2)),
        ("IT부품 (고급)", ItemClass("epic", 3)),
        ("전설의 도자기", ItemClass("legendary", 4)),
    ])
    def test_markers(self, name: str, expected: ItemClass) -> None:
        assert classify_item(name) == expected

    def test_case_insensitive(self) -> None:
        assert classify_item("ARTWORK (HIGH-GRADE)") == ItemClass("epic", 3)

    def test_no_marker_defaults_to_common(self) -> None:
        assert classify_item("Plain Umbrella") == ItemClass("common", 1)


class TestCatalogEntry:
    def _price(self, name: str, grade: str | None = None, required_license: int | None = None) -> MarketPrice:
        return MarketPrice(
            item_name=name,
            district="Gangnam",
            category="Test",
            base_price=1000,
            current_price=1000,
            grade=grade,
            required_license=required_license,
        )

    def test_catalog_fields_win(self) -> None:
        entry = catalog_entry(self._price("IT Parts (Common)", grade="epic", required_license=3))
        assert entry == ItemClass("epic", 3)

    def test_missing_fields_fall_back_to_name(self) -> None:
        entry = catalog_entry(self._price("IT Parts (Mid-tier)"))
        assert entry == ItemClass("rare", 2)

    def test_partial_override(self) -> None:
        entry = catalog_entry(self._price("IT Parts (Mid-tier)", required_license=4))
        assert entry == ItemClass("rare", 4)


class TestCapacity:
    def test_empty_inventory(self, db: Session, make_player: Callable) -> None:
        player_id = make_player()
        assert inventory_occupancy(db, player_id) == 0

    def test_occupancy_sums_quantities(self, db: Session, make_player: Callable, give_item: Callable) -> None:
        player_id = make_player()
        give_item(player_id, "A", 2)
        give_item(player_id, "B", 1)
        assert inventory_occupancy(db, player_id) == 3

    def test_occupancy_is_per_player(self, db: Session, make_player: Callable, give_item: Callable) -> None:
        mine, theirs = make_player(), make_player()
        give_item(theirs, "A", 4)
        assert inventory_occupancy(db, mine) == 0

    def test_can_acquire_up_to_capacity(self, db: Session, make_player: Callable, give_item: Callable) -> None:
        player_id = make_player()
        give_item(player_id, "A", 3)
        player = db.get(Player, player_id)

        assert can_acquire(db, player, 2)
        assert not can_acquire(db, player, 3)

    def test_capacity_follows_license(self, db: Session, make_player: Callable, give_item: Callable) -> None:
        player_id = make_player(license_tier=2)
        give_item(player_id, "A", 5)
        player = db.get(Player, player_id)

        assert can_acquire(db, player, 3)
        assert not can_acquire(db, player, 4)
