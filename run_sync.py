"""Run one replica sync cycle from the command line.

Uses the same settings as the service (``.env`` / environment), so it can be
pointed at a fresh database to do the initial load by hand.
"""
import sys
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def main():
    from auction_search import crud
    from auction_search.config import get_settings
    from auction_search.db import make_engine, make_session_factory
    from auction_search.services import sync_replica
    from auction_search.upstream import UpstreamClient

    settings = get_settings()
    try:
        engine = make_engine(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
    except RuntimeError as e:
        raise SystemExit(f"Cannot open replica store: {e}")
    session_factory = make_session_factory(engine)
    client = UpstreamClient.from_settings(settings)

    print(f"Syncing from {client.url} ...")
    applied = sync_replica(session_factory, client)

    with session_factory() as db:
        total = crud.count_items(db)
        watermark = crud.latest_updated_at(db)
    print(f"Applied {applied} item(s); replica now holds {total} item(s), watermark {watermark}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
