# tests/test_crud.py
from datetime import timedelta

from auction_search import crud
from auction_search.models import Item
from auction_search.schemas import ItemIn, Status
from auction_search.utils import as_utc

from conftest import NOW, make_item


def _rows(*payloads):
    return [ItemIn.model_validate(p).model_dump() for p in payloads]


def test_upsert_and_get(db):
    crud.upsert_items(db, _rows(make_item("a1", make="Audi", status="Finished")))
    obj = db.get(Item, "a1")
    assert obj is not None
    assert obj.make == "Audi"
    assert obj.status is Status.FINISHED


def test_upsert_same_batch_twice_is_idempotent(db):
    rows = _rows(make_item("a1"), make_item("a2", color="Red"))
    crud.upsert_items(db, rows)
    crud.upsert_items(db, rows)
    assert crud.count_items(db) == 2
    assert db.get(Item, "a2").color == "Red"


def test_upsert_overwrites_in_place(db):
    crud.upsert_items(db, _rows(make_item("a1", currentHighBid=100)))
    crud.upsert_items(db, _rows(make_item("a1", currentHighBid=250, updatedAt=NOW)))
    db.expire_all()
    assert crud.count_items(db) == 1
    assert db.get(Item, "a1").current_high_bid == 250


def test_upsert_ignores_older_version(db):
    crud.upsert_items(db, _rows(make_item("a1", currentHighBid=250, updatedAt=NOW)))
    crud.upsert_items(db, _rows(make_item("a1", currentHighBid=100, updatedAt=NOW - timedelta(hours=1))))
    db.expire_all()
    obj = db.get(Item, "a1")
    assert obj.current_high_bid == 250
    assert as_utc(obj.updated_at) == NOW


def test_upsert_empty_batch(db):
    assert crud.upsert_items(db, []) == 0
    assert crud.count_items(db) == 0


def test_latest_updated_at(db):
    assert crud.latest_updated_at(db) is None
    crud.upsert_items(db, _rows(
        make_item("a1", updatedAt=NOW - timedelta(days=2)),
        make_item("a2", updatedAt=NOW),
    ))
    assert as_utc(crud.latest_updated_at(db)) == NOW


def test_ensure_search_index_is_repeatable(db):
    crud.ensure_search_index(db)
    crud.ensure_search_index(db)
    assert crud.count_items(db) == 0


def test_upsert_keeps_newest_duplicate_in_batch(db):
    older = make_item("a1", currentHighBid=100, updatedAt=NOW - timedelta(hours=1))
    newer = make_item("a1", currentHighBid=300, updatedAt=NOW)
    assert crud.upsert_items(db, _rows(newer, older)) == 1
    crud.upsert_items(db, _rows(make_item("a2"), older, newer))
    db.expire_all()
    assert crud.count_items(db) == 2
    assert db.get(Item, "a1").current_high_bid == 300
