"""Search service entry point.

Run with ``uvicorn --factory auction_search.main:create_app``.
"""
import threading

from fastapi import FastAPI

from auction_search import crud
from auction_search.api.routes import router as api_router
from auction_search.config import Settings, get_settings
from auction_search.db import make_engine, make_session_factory
from auction_search.scheduler import start_scheduler
from auction_search.services import run_sync_job
from auction_search.upstream import UpstreamClient
from auction_search.utils import logger


def create_app(settings: Settings | None = None, session_factory=None, upstream=None, start_sync=True):
    settings = settings or get_settings()
    if session_factory is None:
        engine = make_engine(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
        session_factory = make_session_factory(engine)

    app = FastAPI(title="Auction search")
    app.state.settings = settings
    app.state.session_factory = session_factory
    if upstream is None:
        stop_event = threading.Event()
        upstream = UpstreamClient.from_settings(settings, stop=stop_event)
    else:
        stop_event = getattr(upstream, "stop", None) or threading.Event()
    app.state.stop_event = stop_event
    app.state.upstream = upstream
    app.state.scheduler = None
    app.include_router(api_router)

    @app.on_event("startup")
    def on_startup():
        # tables must exist before the first search, sync may still be retrying
        with session_factory() as db:
            crud.create_tables(db.get_bind())
        if start_sync:
            app.state.scheduler = start_scheduler(
                run_sync_job,
                settings.sync_interval_minutes,
                args=(session_factory, app.state.upstream),
            )

    @app.on_event("shutdown")
    def on_shutdown():
        # wakes a sync stuck retrying so its worker thread can exit
        app.state.stop_event.set()
        if app.state.scheduler is not None:
            app.state.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    return app
