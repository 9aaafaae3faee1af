# auction_search/schemas.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .utils import as_utc, logger

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 4
MAX_PAGE_SIZE = 100


class Status(str, Enum):
    LIVE = "Live"
    FINISHED = "Finished"
    RESERVE_NOT_MET = "ReserveNotMet"


class OrderBy(str, Enum):
    MAKE = "make"
    NEW = "new"
    AUCTION_END = "auctionEnd"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OrderBy":
        return _parse_choice(cls, value, cls.AUCTION_END)


class FilterBy(str, Enum):
    FINISHED = "finished"
    ENDING_SOON = "endingSoon"
    LIVE = "live"

    @classmethod
    def parse(cls, value: Optional[str]) -> "FilterBy":
        return _parse_choice(cls, value, cls.LIVE)


def _parse_choice(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Unknown %s value %r, using %s", enum_cls.__name__, value, default.value)
        return default


class ItemBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    year: Optional[int] = None
    mileage: Optional[int] = None
    image_url: Optional[str] = None
    reserve_price: Optional[int] = None
    current_high_bid: Optional[int] = None
    sold_amount: Optional[int] = None
    seller: Optional[str] = None
    winner: Optional[str] = None
    status: Status = Status.LIVE
    created_at: Optional[datetime] = None
    updated_at: datetime
    auction_end: datetime

    @field_validator("created_at", "updated_at", "auction_end")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)


class ItemIn(ItemBase):
    """Item as published by the upstream auction service."""


class ItemOut(ItemBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SearchParams(BaseModel):
    """Search request; anything unparsable falls back to its default."""

    search_term: Optional[str] = None
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE
    seller: Optional[str] = None
    winner: Optional[str] = None
    order_by: OrderBy = OrderBy.AUCTION_END
    filter_by: FilterBy = FilterBy.LIVE

    @field_validator("page_number", mode="before")
    @classmethod
    def _page_number(cls, value):
        return _positive_int(value, DEFAULT_PAGE_NUMBER)

    @field_validator("page_size", mode="before")
    @classmethod
    def _page_size(cls, value):
        return min(_positive_int(value, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)

    @field_validator("order_by", mode="before")
    @classmethod
    def _order_by(cls, value):
        return OrderBy.parse(value)

    @field_validator("filter_by", mode="before")
    @classmethod
    def _filter_by(cls, value):
        return FilterBy.parse(value)


def _positive_int(value, default):
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, number)


class SearchPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    results: List[ItemOut]
    page_count: int
    total_count: int
