# auction_search/services.py
from . import crud
from .upstream import UpstreamClient, UpstreamError
from .utils import logger


def sync_replica(session_factory, client: UpstreamClient) -> int:
    """Pull items changed since the replica watermark and upsert them.

    Returns the number of items applied. A non-retryable upstream failure is
    logged and leaves the replica untouched.
    """
    with session_factory() as db:
        crud.ensure_search_index(db)
        watermark = crud.latest_updated_at(db)
    logger.info("Syncing replica from upstream since %s", watermark or "the beginning")

    try:
        items = client.fetch_since(watermark)
    except UpstreamError as e:
        logger.error("Replica sync aborted: %s", e)
        return 0
    logger.info("%d items retrieved from upstream", len(items))
    if not items:
        return 0

    with session_factory() as db:
        applied = crud.upsert_items(db, [item.model_dump() for item in items])
    logger.info("Applied %d items to replica", applied)
    return applied


def run_sync_job(session_factory, client: UpstreamClient):
    # background entry point; a failed sync must never take the service down
    try:
        return sync_replica(session_factory, client)
    except Exception as e:
        logger.exception("Replica sync failed: %s", e)
        return 0
