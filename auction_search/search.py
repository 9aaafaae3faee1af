# auction_search/search.py
"""Search query construction over the item replica.

Parameters are applied in a fixed order: text match, sort key, time window,
seller, winner, pagination. Time windows are computed from ``auction_end``
against the current time, never from the stored status.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from . import crud
from .models import Item
from .schemas import FilterBy, ItemOut, OrderBy, SearchPage, SearchParams
from .utils import as_utc

ENDING_SOON_WINDOW = timedelta(hours=6)


def sort_clause(order_by: OrderBy):
    if order_by is OrderBy.MAKE:
        return Item.make.asc()
    if order_by is OrderBy.NEW:
        return Item.created_at.desc()
    return Item.auction_end.asc()


def time_window(filter_by: FilterBy, now: datetime):
    if filter_by is FilterBy.FINISHED:
        return Item.auction_end < now
    if filter_by is FilterBy.ENDING_SOON:
        return and_(Item.auction_end > now, Item.auction_end < now + ENDING_SOON_WINDOW)
    return Item.auction_end > now


def search_items(db: Session, params: SearchParams, now: Optional[datetime] = None) -> SearchPage:
    now = as_utc(now) if now else datetime.now(timezone.utc)
    conds = []
    ordering = []

    relevance = None
    if params.search_term:
        match, relevance = crud.text_match(db, params.search_term)
        conds.append(match)

    # an explicit sort key wins; text relevance only breaks ties
    ordering.append(sort_clause(params.order_by))
    if relevance is not None:
        ordering.append(relevance.desc())
    ordering.append(Item.id.asc())

    conds.append(time_window(params.filter_by, now))
    if params.seller:
        conds.append(Item.seller == params.seller)
    if params.winner:
        conds.append(Item.winner == params.winner)

    q = db.query(Item).filter(and_(*conds))
    total = q.count()
    page_count = math.ceil(total / params.page_size)
    skip = (params.page_number - 1) * params.page_size
    if skip >= total:
        # past the last page; keeps huge offsets away from the driver
        return SearchPage(results=[], page_count=page_count, total_count=total)
    items = q.order_by(*ordering).offset(skip).limit(params.page_size).all()
    results = [ItemOut.model_validate(item) for item in items]
    return SearchPage(results=results, page_count=page_count, total_count=total)
