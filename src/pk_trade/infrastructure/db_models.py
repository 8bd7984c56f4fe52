"""SQLAlchemy ORM model for pk_trade.

Maps to the table created by Alembic migration 004_create_trades.py.
"""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.pk_common.database import Base


class TradeORM(Base):
    __tablename__ = "trades"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    listing_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("marketplace_listings.id"), nullable=False
    )
    asset_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parking_assets.id"), nullable=False
    )
    buyer: Mapped[str] = mapped_column(String(64), nullable=False)
    seller: Mapped[str] = mapped_column(String(64), nullable=False)
    token_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price_paid: Mapped[int] = mapped_column(BigInteger, nullable=False)
    platform_fee: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    seller_proceeds: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payment_denomination: Mapped[str] = mapped_column(String(64), nullable=False)
    traded_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # Unix seconds
    # NOTE: No updated_at; trades are immutable
