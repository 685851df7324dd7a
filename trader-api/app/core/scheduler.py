"""
APScheduler pour les tâches automatiques
- Mise à jour périodique des prix du marché
"""
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.services.pricing_service import PricingModel

logger = logging.getLogger(__name__)

# Instance globale du scheduler
scheduler = BackgroundScheduler()


def setup_jobs(pricing: PricingModel):
    """Configure tous les jobs planifiés"""
    # Job 1: Prix du marché (toutes les 3h par défaut)
    scheduler.add_job(
        pricing.recompute_all,
        trigger=IntervalTrigger(hours=settings.PRICE_UPDATE_INTERVAL_HOURS),
        id="market_price_update",
        name="Mise à jour des prix du marché",
        replace_existing=True,
    )

    logger.info(f"[Scheduler] Prix recalculés toutes les {settings.PRICE_UPDATE_INTERVAL_HOURS}h")


def start_scheduler(pricing: PricingModel):
    """Démarre le scheduler au lancement de l'app"""
    if not scheduler.running:
        setup_jobs(pricing)
        scheduler.start()
        logger.info("[Scheduler] Démarré")


def stop_scheduler():
    """Arrête proprement le scheduler"""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("[Scheduler] Arrêté")
