"""SQLAlchemy ORM model for pk_asset.

Maps to the table created by Alembic migration 002_create_parking_assets.py.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pk_common.database import Base


class ParkingAssetORM(Base):
    __tablename__ = "parking_assets"
    __table_args__ = (UniqueConstraint("parking_lot_id", "spot_label"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    token_denomination: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    asset_type: Mapped[str] = mapped_column(String(20), nullable=False)
    parking_lot_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    spot_label: Mapped[str] = mapped_column(String(32), nullable=False)
    total_supply: Mapped[int] = mapped_column(BigInteger, nullable=False)
    circulating_supply: Mapped[int] = mapped_column(BigInteger, nullable=False)
    estimated_value: Mapped[int] = mapped_column(BigInteger, nullable=False)
    annual_revenue: Mapped[int] = mapped_column(BigInteger, nullable=False)
    revenue_share_bps: Mapped[int] = mapped_column(Integer, nullable=False)
    institutional_operator: Mapped[str] = mapped_column(String(64), nullable=False)
    compliance_status: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_tradeable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # Unix seconds
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
