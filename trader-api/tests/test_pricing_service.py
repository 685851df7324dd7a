"""Tests for the market pricing model."""

import random
from datetime import datetime

import pytest
from sqlalchemy.orm import Session, sessionmaker

from app.models.market_price import MarketPrice
from app.services.pricing_service import PricingModel, next_price, price_bounds


class FixedRng:
    """Stand-in random source whose uniform() returns queued values."""

    def __init__(self, *values: float) -> None:
        self.values = list(values)

    def uniform(self, a: float, b: float) -> float:
        assert (a, b) == (-0.2, 0.2)
        return self.values.pop(0)


class TestPriceBounds:
    @pytest.mark.parametrize("base, expected", [
        (5000, (2500, 7500)),
        (5001, (2501, 7501)),
        (1, (1, 1)),
        (3, (2, 4)),
    ])
    def test_integer_bounds_stay_inside_ratio(self, base: int, expected: tuple[int, int]) -> None:
        assert price_bounds(base) == expected


class TestNextPrice:
    def test_walk_inside_bounds(self) -> None:
        assert next_price(5000, 5000, FixedRng(0.1)) == 5500

    def test_clamped_to_ceiling(self) -> None:
        assert next_price(5000, 7400, FixedRng(0.2)) == 7500

    def test_clamped_to_floor(self) -> None:
        assert next_price(5000, 2600, FixedRng(-0.2)) == 2500

    def test_out_of_range_current_is_pulled_back(self) -> None:
        assert next_price(5000, 20000, FixedRng(0.0)) == 7500

    @pytest.mark.parametrize("seed", range(20))
    def test_always_within_half_and_one_and_half_base(self, seed: int) -> None:
        rng = random.Random(seed)
        base = rng.randint(1, 100_000)
        current = base
        for _ in range(200):
            current = next_price(base, current, rng)
            assert 0.5 * base <= current <= 1.5 * base
            assert isinstance(current, int)


class TestPricingModel:
    def test_current_price(self, seeded: Session, session_factory: sessionmaker) -> None:
        pricing = PricingModel(session_factory)
        assert pricing.current_price(seeded, "IT Parts (Common)") == 5000
        assert pricing.current_price(seeded, "Unknown Item") is None

    def test_recompute_persists_and_touches_timestamp(self, seeded: Session, session_factory: sessionmaker) -> None:
        row = seeded.get(MarketPrice, "IT Parts (Common)")
        row.last_updated = datetime(2020, 1, 1)
        seeded.commit()

        pricing = PricingModel(session_factory, rng=FixedRng(0.1))
        assert pricing.recompute(seeded, "IT Parts (Common)") == 5500
        seeded.commit()

        seeded.expire_all()
        row = seeded.get(MarketPrice, "IT Parts (Common)")
        assert row.current_price == 5500
        assert row.last_updated > datetime(2020, 1, 1)

    def test_recompute_missing_item_is_skipped(self, seeded: Session, session_factory: sessionmaker) -> None:
        pricing = PricingModel(session_factory, rng=FixedRng())
        assert pricing.recompute(seeded, "Unknown Item") is None

    def test_two_recomputes_are_two_draws(self, seeded: Session, session_factory: sessionmaker) -> None:
        pricing = PricingModel(session_factory, rng=FixedRng(0.1, 0.1))
        pricing.recompute(seeded, "IT Parts (Common)")
        assert pricing.recompute(seeded, "IT Parts (Common)") == 6050

    def test_recompute_all(self, seeded: Session, session_factory: sessionmaker) -> None:
        count = seeded.query(MarketPrice).count()
        pricing = PricingModel(session_factory, rng=random.Random(7))

        updated = pricing.recompute_all()

        assert len(updated) == count
        seeded.expire_all()
        for row in seeded.query(MarketPrice).all():
            assert row.current_price == updated[row.item_name]
            low, high = price_bounds(row.base_price)
            assert low <= row.current_price <= high

    def test_recompute_all_is_deterministic_with_seed(self, seeded: Session, session_factory: sessionmaker) -> None:
        first = PricingModel(session_factory, rng=random.Random(3)).recompute_all()

        # reset prices, replay with the same seed
        for row in seeded.query(MarketPrice).all():
            row.current_price = row.base_price
        seeded.commit()

        second = PricingModel(session_factory, rng=random.Random(3)).recompute_all()
        assert first == second
