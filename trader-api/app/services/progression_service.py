"""
Trust / progression ledger
Trust is a non-spendable score that gates license upgrades.
The daily bonus window runs from the last claim (last_daily_bonus_at),
not from last_active, so moving or trading does not push it back.
"""
import math
from datetime import datetime, timedelta

from app.models.player import Player
from app.services.trade_errors import TradeError, TradeErrorKind

# Configuration
TRADE_TRUST_REWARD = 0             # price-v2: trades give no trust
LICENSE_UPGRADE_TRUST_REWARD = 10
DAILY_BONUS_TRUST_REWARD = 5
DAILY_BONUS_PER_TIER = 5000
DAILY_BONUS_COOLDOWN = timedelta(hours=24)


def award_trust(player: Player, points: int) -> None:
    if points > 0:
        player.trust_points += points


def award_trade_trust(player: Player) -> None:
    award_trust(player, TRADE_TRUST_REWARD)


def award_upgrade_trust(player: Player) -> None:
    award_trust(player, LICENSE_UPGRADE_TRUST_REWARD)


def daily_bonus_amount(player: Player) -> int:
    return DAILY_BONUS_PER_TIER * player.current_license


def bonus_remaining_hours(player: Player, now: datetime) -> int:
    """Whole hours (rounded up) until the next claim, 0 if available."""
    if player.last_daily_bonus_at is None:
        return 0
    remaining = player.last_daily_bonus_at + DAILY_BONUS_COOLDOWN - now
    if remaining <= timedelta(0):
        return 0
    return math.ceil(remaining.total_seconds() / 3600)


def claim_daily_bonus(player: Player, now: datetime) -> int:
    """Credit the daily bonus. Returns the amount paid."""
    remaining_hours = bonus_remaining_hours(player, now)
    if remaining_hours > 0:
        raise TradeError(
            TradeErrorKind.BONUS_NOT_YET_AVAILABLE,
            f"Daily bonus available again in {remaining_hours}h",
            data={"remaining_hours": remaining_hours},
        )

    amount = daily_bonus_amount(player)
    player.money += amount
    award_trust(player, DAILY_BONUS_TRUST_REWARD)
    player.last_daily_bonus_at = now
    return amount
