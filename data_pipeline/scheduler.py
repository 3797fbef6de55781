import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from utils.constants import SCHED_TZ

from .cache import SeriesCache

logger = logging.getLogger(__name__)


class RefreshScheduler:
    def __init__(self, cache: SeriesCache, timezone: str = SCHED_TZ):
        self.cache = cache
        self.scheduler = BackgroundScheduler(timezone=timezone)

    def refresh_assets(self, assets: list[str]):
        for a in assets:
            try:
                self.cache.refresh(a)
                logger.info(f"Refreshed {a}")
            except Exception as e:
                logger.exception(f"Refresh failed for {a}: {e}")

    def start_daily_refresh(self, assets: list[str]):
        # 16:15 in the scheduler timezone, after the US close
        trigger = CronTrigger(hour=16, minute=15)
        self.scheduler.add_job(
            self.refresh_assets,
            trigger,
            args=[assets],
            id="daily_refresh",
            replace_existing=True,
        )
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info(f"Daily refresh scheduled for: {assets}")

    def shutdown(self):
        self.scheduler.shutdown(wait=False)
