from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_player, get_trade_engine, raise_for_outcome
from app.models.player import Player
from app.models.trade_record import TradeRecord
from app.schemas.trade import BuyIn, BuyOut, SellIn, SellOut, TradeHistoryOut, TradeOut
from app.services.trade_service import TradeEngine

router = APIRouter(prefix="/game/trade", tags=["trade"])


@router.post("/buy", response_model=BuyOut)
def buy_item(
    payload: BuyIn,
    player: Player = Depends(get_current_player),
    engine: TradeEngine = Depends(get_trade_engine),
):
    outcome = engine.buy(player.id, payload.merchant_id, payload.item_name, payload.quantity)
    return raise_for_outcome(outcome)


@router.post("/sell", response_model=SellOut)
def sell_item(
    payload: SellIn,
    player: Player = Depends(get_current_player),
    engine: TradeEngine = Depends(get_trade_engine),
):
    outcome = engine.sell(player.id, payload.item_id, payload.merchant_id, payload.quantity)
    return raise_for_outcome(outcome)


@router.get("/history", response_model=TradeHistoryOut)
def trade_history(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    player: Player = Depends(get_current_player),
):
    query = db.query(TradeRecord).filter(
        or_(TradeRecord.buyer_id == player.id, TradeRecord.seller_id == player.id)
    )
    total = query.count()
    trades = (
        query.order_by(TradeRecord.timestamp.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return TradeHistoryOut(
        page=page,
        limit=limit,
        total=total,
        trades=[TradeOut.model_validate(t) for t in trades],
    )
