# auction_search/crud.py
"""Replica store operations for `Item` rows.

Batch upsert keyed by item id, the sync watermark, search index setup and the
dialect-specific full-text matching used by the search query builder.
"""
import re
from typing import Any, Dict, List

from sqlalchemy import case, false, func, literal_column, or_, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from .db import Base
from .models import Item

TEXT_FIELDS = ("make", "model", "color")
# literal, not a bind param: must match the GIN index expression
TEXT_CONFIG = literal_column("'english'::regconfig")
UPSERT_CHUNK_SIZE = 500

_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}
_WORD = re.compile(r"\w+", re.UNICODE)


def create_tables(engine):
    Base.metadata.create_all(bind=engine)


def ensure_search_index(db: Session):
    """Create the full-text index over make/model/color; safe to repeat."""
    bind = db.get_bind()
    create_tables(bind)
    if bind.dialect.name != "postgresql":
        return
    document = " || ' ' || ".join(f"coalesce({name}, '')" for name in TEXT_FIELDS)
    db.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_items_text ON items "
        f"USING gin (to_tsvector('english'::regconfig, {document}))"
    ))
    db.commit()


def upsert_items(db: Session, rows: List[Dict[str, Any]]) -> int:
    if not rows:
        return 0
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"upsert not supported for dialect {dialect!r}")
    rows = _latest_per_id(rows)
    table = Item.__table__
    for start in range(0, len(rows), UPSERT_CHUNK_SIZE):
        stmt = insert(table).values(rows[start:start + UPSERT_CHUNK_SIZE])
        # updated_at is owned by upstream; never let a row move backwards
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.id],
            set_={c.name: stmt.excluded[c.name] for c in table.columns if c.name != "id"},
            where=table.c.updated_at <= stmt.excluded.updated_at,
        )
        db.execute(stmt)
    db.commit()
    return len(rows)


def _latest_per_id(rows):
    # one statement may not touch the same row twice on PostgreSQL
    latest = {}
    for row in rows:
        seen = latest.get(row["id"])
        if seen is None or row["updated_at"] >= seen["updated_at"]:
            latest[row["id"]] = row
    return list(latest.values())


def latest_updated_at(db: Session):
    return db.query(func.max(Item.updated_at)).scalar()


def count_items(db: Session) -> int:
    return db.query(func.count(Item.id)).scalar()


def text_match(db: Session, term: str):
    """Return ``(condition, score)`` matching any word of `term`."""
    words = _WORD.findall(term.lower())
    if not words:
        return false(), literal_column("0")
    if db.get_bind().dialect.name == "postgresql":
        document = func.to_tsvector(TEXT_CONFIG, _concat_text_fields())
        query = func.to_tsquery(TEXT_CONFIG, " | ".join(words))
        return document.bool_op("@@")(query), func.ts_rank(document, query)
    # substring fallback for engines without text search
    hits = [
        or_(*[getattr(Item, name).ilike(f"%{_escape_like(word)}%", escape="\\") for word in words])
        for name in TEXT_FIELDS
    ]
    score = case((hits[0], 1), else_=0)
    for hit in hits[1:]:
        score = score + case((hit, 1), else_=0)
    return or_(*hits), score


def _escape_like(word: str) -> str:
    return word.replace("\\", "\\\\").replace("_", "\\_").replace("%", "\\%")


def _concat_text_fields():
    empty = literal_column("''")
    parts = [func.coalesce(getattr(Item, name), empty) for name in TEXT_FIELDS]
    expr = parts[0]
    for part in parts[1:]:
        expr = expr.op("||")(literal_column("' '")).op("||")(part)
    return expr
