"""SQLAlchemy ORM model for pk_listing.

Maps to the table created by Alembic migration 003_create_marketplace_listings.py.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import ARRAY, BigInteger, Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pk_common.database import Base


class MarketplaceListingORM(Base):
    __tablename__ = "marketplace_listings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    asset_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parking_assets.id"), nullable=False
    )
    seller: Mapped[str] = mapped_column(String(64), nullable=False)
    listing_type: Mapped[str] = mapped_column(String(20), nullable=False)
    initial_token_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    token_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price_per_token: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payment_methods: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)
    minimum_purchase: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    kyb_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # Unix seconds
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # Unix seconds
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
