# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from auction_search import crud
from auction_search.db import make_engine, make_session_factory

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    crud.create_tables(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_item(item_id, **overrides):
    """Upstream-shaped (camelCase) item payload."""
    payload = {
        "id": item_id,
        "make": "Ford",
        "model": "GT",
        "color": "White",
        "year": 2020,
        "mileage": 50000,
        "imageUrl": "https://cdn.example.com/cars/%s.jpg" % item_id,
        "reservePrice": 20000,
        "currentHighBid": None,
        "soldAmount": None,
        "seller": "bob",
        "winner": None,
        "status": "Live",
        "createdAt": (NOW - timedelta(days=10)).isoformat(),
        "updatedAt": (NOW - timedelta(days=1)).isoformat(),
        "auctionEnd": (NOW + timedelta(days=5)).isoformat(),
    }
    for key, value in overrides.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        payload[key] = value
    return payload
