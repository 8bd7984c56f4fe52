"""SQLAlchemy ORM model for pk_revenue.

Maps to the table created by Alembic migration 005_create_revenue_distributions.py.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pk_common.database import Base


class RevenueDistributionORM(Base):
    __tablename__ = "revenue_distributions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    asset_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parking_assets.id"), nullable=False
    )
    period_start: Mapped[int] = mapped_column(BigInteger, nullable=False)
    period_end: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_revenue: Mapped[int] = mapped_column(BigInteger, nullable=False)
    operating_costs: Mapped[int] = mapped_column(BigInteger, nullable=False)
    net_revenue: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_tokens_outstanding: Mapped[int] = mapped_column(BigInteger, nullable=False)
    revenue_per_token: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_distributed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    distribution_status: Mapped[str] = mapped_column(String(20), nullable=False)
    operator: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # Unix seconds
    completed_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
