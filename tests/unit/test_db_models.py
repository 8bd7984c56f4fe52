"""The reference ORM models must cover every field the repositories map."""

from dataclasses import fields

import pytest

from src.pk_admin.infrastructure.db_models import PlatformConfigORM
from src.pk_asset.domain.models import ParkingAsset
from src.pk_asset.infrastructure.db_models import ParkingAssetORM
from src.pk_common.database import Base
from src.pk_listing.domain.models import MarketplaceListing
from src.pk_listing.infrastructure.db_models import MarketplaceListingORM
from src.pk_revenue.domain.models import RevenueDistribution
from src.pk_revenue.infrastructure.db_models import RevenueDistributionORM
from src.pk_token.domain.models import TokenBalance, TokenLedgerEntry
from src.pk_token.infrastructure.db_models import TokenBalanceORM, TokenLedgerEntryORM
from src.pk_trade.domain.models import Trade
from src.pk_trade.infrastructure.db_models import TradeORM


@pytest.mark.parametrize(
    "domain_cls, orm_cls",
    [
        (ParkingAsset, ParkingAssetORM),
        (MarketplaceListing, MarketplaceListingORM),
        (Trade, TradeORM),
        (RevenueDistribution, RevenueDistributionORM),
        (TokenBalance, TokenBalanceORM),
        (TokenLedgerEntry, TokenLedgerEntryORM),
    ],
)
def test_domain_fields_have_columns(domain_cls: type, orm_cls: type) -> None:
    columns = set(orm_cls.__table__.columns.keys())  # type: ignore[attr-defined]
    missing = {f.name for f in fields(domain_cls)} - columns
    assert not missing


def test_all_tables_registered() -> None:
    assert PlatformConfigORM.__tablename__ in Base.metadata.tables
    assert set(Base.metadata.tables) == {
        "token_balances",
        "token_ledger_entries",
        "parking_assets",
        "marketplace_listings",
        "trades",
        "revenue_distributions",
        "platform_config",
    }
