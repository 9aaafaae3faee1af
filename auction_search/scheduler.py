# auction_search/scheduler.py
from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler
from .utils import logger

def start_scheduler(job, interval_minutes: int = 0, args=()) -> BackgroundScheduler:
    """Run `job` once right away, then every `interval_minutes` when positive."""
    scheduler = BackgroundScheduler(timezone=timezone.utc)
    if interval_minutes > 0:
        scheduler.add_job(
            job, 'interval', minutes=interval_minutes, args=args, id="replica-sync",
            next_run_time=datetime.now(timezone.utc), max_instances=1, coalesce=True,
        )
    else:
        scheduler.add_job(job, 'date', args=args, id="replica-sync")
    scheduler.start()
    logger.info("Scheduler started")
    return scheduler
