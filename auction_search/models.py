# auction_search/models.py
"""SQLAlchemy ORM models for the search replica.

`Item` mirrors the auction item owned by the upstream auction service. Rows are
only ever written by replica sync; search traffic is read-only.
"""
from sqlalchemy import Column, Integer, Text, TIMESTAMP, Enum, Index
from .db import Base
from .schemas import Status

class Item(Base):
    __tablename__ = "items"
    id = Column(Text, primary_key=True)
    make = Column(Text)
    model = Column(Text)
    color = Column(Text)
    year = Column(Integer)
    mileage = Column(Integer)
    image_url = Column(Text)
    reserve_price = Column(Integer)
    current_high_bid = Column(Integer)
    sold_amount = Column(Integer)
    seller = Column(Text)
    winner = Column(Text)
    status = Column(
        Enum(Status, native_enum=False, length=32, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Status.LIVE,
    )
    created_at = Column(TIMESTAMP(timezone=True))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False)
    auction_end = Column(TIMESTAMP(timezone=True), nullable=False)

Index("idx_items_updated_at", Item.updated_at)
Index("idx_items_auction_end", Item.auction_end)
Index("idx_items_seller", Item.seller)
Index("idx_items_winner", Item.winner)
