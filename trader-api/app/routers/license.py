from fastapi import APIRouter, Depends

from app.deps import get_current_player, get_trade_engine, raise_for_outcome
from app.models.player import Player
from app.schemas.trade import DailyBonusOut, LicenseStatusOut, LicenseUpgradeOut
from app.services.license_service import ladder_status
from app.services.trade_service import TradeEngine

router = APIRouter(prefix="/game", tags=["license"])


@router.get("/license", response_model=LicenseStatusOut)
def get_license_status(player: Player = Depends(get_current_player)):
    return LicenseStatusOut(
        money=player.money,
        trust_points=player.trust_points,
        **ladder_status(player),
    )


@router.post("/license/upgrade", response_model=LicenseUpgradeOut)
def upgrade_license(
    player: Player = Depends(get_current_player),
    engine: TradeEngine = Depends(get_trade_engine),
):
    return raise_for_outcome(engine.upgrade_license(player.id))


@router.post("/bonus/daily", response_model=DailyBonusOut)
def claim_daily_bonus(
    player: Player = Depends(get_current_player),
    engine: TradeEngine = Depends(get_trade_engine),
):
    return raise_for_outcome(engine.claim_daily_bonus(player.id))
