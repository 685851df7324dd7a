import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.core.config import settings
from app.core.db import engine, Base, SessionLocal
from app.core.scheduler import start_scheduler, stop_scheduler
from app.routers import auth
from app.routers.player import router as player_router
from app.routers.market import router as market_router
from app.routers.trade import router as trade_router
from app.routers.license import router as license_router
from app.services.market_seed import seed_market
from app.services.pricing_service import PricingModel
from app.services.trade_service import TradeEngine


ROOT_PATH = os.getenv("ROOT_PATH", "")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events"""
    # Startup
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_market(db)
    finally:
        db.close()

    pricing = PricingModel(SessionLocal)
    app.state.trade_engine = TradeEngine(SessionLocal, pricing=pricing)

    if settings.SCHEDULER_ENABLED:
        start_scheduler(pricing)
        logger.info("[Scheduler] Market price scheduler started")

    yield

    # Shutdown
    stop_scheduler()
    logger.info("[Scheduler] Market price scheduler stopped")


app = FastAPI(
    title="Seoul Trader API",
    version="1.0",
    root_path=ROOT_PATH,
    lifespan=lifespan,
)

# CORS middleware for the mobile client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["system"])
def health():
    return {"ok": True}


@app.get("/", tags=["system"])
def root():
    return {"service": "seoul-trader-api"}


app.include_router(auth.router)
app.include_router(player_router)
app.include_router(market_router)
app.include_router(trade_router)
app.include_router(license_router)
