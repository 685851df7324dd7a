import uuid

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from sqlalchemy.orm import Session
from app.core.db import SessionLocal
from app.core.config import settings
from app.models.player import Player
from app.models.user import User
from app.services.trade_errors import NOT_FOUND_KINDS, TradeErrorKind, TradeOutcome
from app.services.trade_service import TradeEngine

bearer = HTTPBearer()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_trade_engine(request: Request) -> TradeEngine:
    return request.app.state.trade_engine

def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    token = creds.credentials
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
        user_id = payload.get("sub")
        if not user_id:
            raise HTTPException(status_code=401, detail="Invalid token")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.id == _parse_uuid(user_id)).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User inactive or not found")
    return user

def get_current_player(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Player:
    player = db.query(Player).filter(Player.user_id == user.id).first()
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player

def raise_for_outcome(outcome: TradeOutcome) -> dict:
    """Return the payload of a successful outcome, raise HTTPException otherwise."""
    if outcome.success:
        return outcome.data
    if outcome.error in NOT_FOUND_KINDS:
        status_code = 404
    elif outcome.error == TradeErrorKind.STORAGE_ERROR:
        status_code = 500
    else:
        status_code = 400
    raise HTTPException(
        status_code=status_code,
        detail={"error": outcome.error.value, "message": outcome.detail, **outcome.data},
    )

def _parse_uuid(value: str):
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token")
