import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.deps import get_db
from app.core.config import settings
from app.models.user import User
from app.models.player import Player
from app.schemas.auth import RegisterIn, LoginIn, TokenOut, UserInfo, PlayerSummary
from app.core.security import hash_password, verify_password, create_access_token
from app.services.license_service import MIN_LICENSE_TIER, capacity_for_tier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_out(user: User, player: Player) -> TokenOut:
    return TokenOut(
        access_token=create_access_token(str(user.id)),
        user=UserInfo(id=user.id, email=user.email, username=user.username),
        player=PlayerSummary(
            id=player.id,
            name=player.name,
            money=player.money,
            trust_points=player.trust_points,
            current_license=player.current_license,
            max_inventory_size=player.max_inventory_size,
        ),
    )


@router.post("/register", response_model=TokenOut)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    email = payload.email.lower()

    exists = db.query(User).filter(User.email == email).first()
    if exists:
        raise HTTPException(status_code=400, detail="Email already used")

    exists_u = db.query(User).filter(User.username == payload.username).first()
    if exists_u:
        raise HTTPException(status_code=400, detail="Username already used")

    try:
        user = User(
            email=email,
            username=payload.username,
            password_hash=hash_password(payload.password),
        )
        db.add(user)
        db.flush()

        player = Player(
            user_id=user.id,
            name=payload.player_name,
            money=settings.STARTING_MONEY,
            trust_points=0,
            current_license=MIN_LICENSE_TIER,
            max_inventory_size=capacity_for_tier(MIN_LICENSE_TIER),
        )
        db.add(player)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    db.refresh(player)
    logger.info(f"[Auth] New player {player.name} ({user.email})")
    return _token_out(user, player)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    player = db.query(Player).filter(Player.user_id == user.id).first()
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")

    return _token_out(user, player)
