"""
License ladder
- Tiers 1..5, one step per upgrade
- Upgrade needs money >= cost AND trust >= threshold (trust is not spent)
- Tier decides inventory capacity
"""
from app.models.player import Player
from app.services.trade_errors import TradeError, TradeErrorKind

MIN_LICENSE_TIER = 1
MAX_LICENSE_TIER = 5

# Target tier -> (upgrade cost, trust threshold)
LICENSE_UPGRADE_REQUIREMENTS = {
    2: (100000, 50),
    3: (250000, 150),
    4: (500000, 300),
    5: (1000000, 500),
}

LICENSE_CAPACITY = {1: 5, 2: 8, 3: 12, 4: 16, 5: 20}


def _check_tier(tier: int) -> None:
    if tier < MIN_LICENSE_TIER or tier > MAX_LICENSE_TIER:
        raise ValueError(f"License tier must be between {MIN_LICENSE_TIER} and {MAX_LICENSE_TIER}, got {tier}")


def upgrade_cost(tier: int) -> int:
    """Money needed to reach `tier` (2..5)."""
    if tier not in LICENSE_UPGRADE_REQUIREMENTS:
        raise ValueError(f"No upgrade leads to tier {tier}")
    return LICENSE_UPGRADE_REQUIREMENTS[tier][0]


def required_trust(tier: int) -> int:
    """Trust points needed to reach `tier` (2..5)."""
    if tier not in LICENSE_UPGRADE_REQUIREMENTS:
        raise ValueError(f"No upgrade leads to tier {tier}")
    return LICENSE_UPGRADE_REQUIREMENTS[tier][1]


def capacity_for_tier(tier: int) -> int:
    _check_tier(tier)
    return LICENSE_CAPACITY[tier]


def next_tier(player: Player) -> int:
    """Validate an upgrade for `player` and return the tier it leads to."""
    current = player.current_license
    if current >= MAX_LICENSE_TIER:
        raise TradeError(TradeErrorKind.MAX_TIER_REACHED, f"License tier {MAX_LICENSE_TIER} is the highest")

    target = current + 1
    cost = upgrade_cost(target)
    trust = required_trust(target)

    # Funds are reported first when both are missing
    if player.money < cost:
        raise TradeError(
            TradeErrorKind.INSUFFICIENT_FUNDS,
            f"Upgrade to tier {target} costs {cost}, balance is {player.money}",
        )
    if player.trust_points < trust:
        raise TradeError(
            TradeErrorKind.INSUFFICIENT_TRUST,
            f"Upgrade to tier {target} needs {trust} trust points, have {player.trust_points}",
        )
    return target


def apply_upgrade(player: Player) -> int:
    """Advance `player` one tier. Returns the cost paid."""
    target = next_tier(player)
    cost = upgrade_cost(target)

    player.money -= cost
    player.current_license = target
    player.max_inventory_size = capacity_for_tier(target)
    return cost


def ladder_status(player: Player) -> dict:
    status = {
        "current_license": player.current_license,
        "max_inventory_size": capacity_for_tier(player.current_license),
        "next_license": None,
        "upgrade_cost": None,
        "required_trust": None,
    }
    if player.current_license < MAX_LICENSE_TIER:
        target = player.current_license + 1
        status.update(
            next_license=target,
            upgrade_cost=upgrade_cost(target),
            required_trust=required_trust(target),
        )
    return status
